from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField, DateTimeLocalField, SelectField, HiddenField
from wtforms.validators import DataRequired, Optional, Email, Length
from ...models.candidate import EDITABLE_STATUSES


class CandidateForm(FlaskForm):
    name = StringField("Full Name", validators=[DataRequired(), Length(max=120)])
    email = StringField("Email Address", validators=[DataRequired(), Email(), Length(max=254)])
    phone = StringField("Phone Number", validators=[Optional(), Length(max=40)])
    # first technical round; left empty to schedule later
    interview_at = DateTimeLocalField("Technical Interview", format='%Y-%m-%dT%H:%M', validators=[Optional()])
    submit = SubmitField("Add Candidate")


class EditCandidateForm(FlaskForm):
    name = StringField("Full Name", validators=[DataRequired(), Length(max=120)])
    email = StringField("Email Address", validators=[DataRequired(), Email(), Length(max=254)])
    phone = StringField("Phone Number", validators=[Optional(), Length(max=40)])
    status = SelectField("Status", choices=[(s.value, s.label.title()) for s in EDITABLE_STATUSES])
    submit = SubmitField("Save Changes")


class DeleteForm(FlaskForm):
    confirm = HiddenField(validators=[DataRequired()])
    submit = SubmitField("Delete")
