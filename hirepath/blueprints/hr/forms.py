from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Optional


class StatusOverrideForm(FlaskForm):
    status = StringField("Status", validators=[DataRequired()])
    reason = TextAreaField("Reason", validators=[Optional()])
