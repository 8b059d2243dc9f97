from flask_wtf import FlaskForm
from flask_wtf.file import FileField
from wtforms import FloatField, SelectField, StringField, TextAreaField
from wtforms.validators import Optional

from ...services.stage_tracker import STAGE_STATUSES


class StageOutcomeForm(FlaskForm):
    status = SelectField("Status", choices=[(s, s) for s in STAGE_STATUSES])
    # range is checked by the stage tracker
    score = FloatField("Score", validators=[Optional()])
    feedback = TextAreaField("Feedback", validators=[Optional()])


class ResumeForm(FlaskForm):
    resume = FileField("Resume", validators=[Optional()])
    resume_text = TextAreaField("Resume text", validators=[Optional()])
    resume_url = StringField("Resume URL", validators=[Optional()])
