from flask_wtf import FlaskForm
from wtforms import DateField, IntegerField, StringField, TextAreaField, TimeField
from wtforms.validators import DataRequired, Optional

from ...utils.forms import ListField


class InterviewForm(FlaskForm):
    application_id = IntegerField("Application", validators=[DataRequired()])
    # stage and slot are checked by the scheduling service
    stage = StringField("Stage", validators=[Optional()])
    scheduled_date = DateField("Date", format="%Y-%m-%d", validators=[Optional()])
    scheduled_time = TimeField("Time", format="%H:%M", validators=[Optional()])
    interviewer_id = IntegerField("Interviewer", validators=[Optional()])
    location = StringField("Location", validators=[Optional()])
    meeting_link = StringField("Meeting link", validators=[Optional()])


class InterviewStatusForm(FlaskForm):
    status = StringField("Status", validators=[DataRequired()])
    feedback = TextAreaField("Feedback", validators=[Optional()])
    rating = IntegerField("Rating", validators=[Optional()])


class InterviewFeedbackForm(FlaskForm):
    # score ranges and the recommendation are checked by the interview service
    technical_score = IntegerField("Technical", validators=[Optional()])
    communication_score = IntegerField("Communication", validators=[Optional()])
    problem_solving_score = IntegerField("Problem solving", validators=[Optional()])
    cultural_fit_score = IntegerField("Cultural fit", validators=[Optional()])
    overall_recommendation = StringField("Recommendation", validators=[Optional()])
    detailed_feedback = TextAreaField("Feedback", validators=[Optional()])
    strengths = ListField("Strengths")
    areas_for_improvement = ListField("Areas for improvement")
    follow_up_questions = ListField("Follow-up questions")
