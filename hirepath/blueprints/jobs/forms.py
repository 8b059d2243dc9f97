from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, SelectField, IntegerField, DateField
from wtforms.validators import DataRequired, Length, Optional

from ...models.job import JOB_TYPES, EXPERIENCE_LEVELS
from ...utils.forms import ListField


class JobForm(FlaskForm):
    title = StringField("Title", validators=[DataRequired(), Length(max=200)])
    company = StringField("Company", validators=[DataRequired(), Length(max=200)])
    description = TextAreaField("Description", validators=[DataRequired()])
    location = StringField("Location", validators=[DataRequired(), Length(max=200)])
    job_type = SelectField("Job type", choices=[(t, t) for t in JOB_TYPES], default="full_time")
    experience_level = SelectField("Experience level", choices=[(e, e) for e in EXPERIENCE_LEVELS], default="entry")
    salary_min = IntegerField("Salary from", validators=[Optional()])
    salary_max = IntegerField("Salary to", validators=[Optional()])
    required_skills = ListField("Required skills")
    application_deadline = DateField("Deadline", format="%Y-%m-%d", validators=[Optional()])


class ApplyForm(FlaskForm):
    cover_letter = TextAreaField("Cover letter", validators=[Optional()])
