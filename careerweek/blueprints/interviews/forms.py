from flask_wtf import FlaskForm
from wtforms import DateTimeLocalField, SubmitField, TextAreaField, SelectField, FloatField, HiddenField
from wtforms.validators import Optional, NumberRange
from ...models.interview import RoundType
from ...services.scoring import TECHNICAL_CATEGORIES, DIRECTOR_CATEGORIES


def category_label(key):
    return key.replace("_", " ").title()


class InterviewForm(FlaskForm):
    round_type = SelectField("Round Type", choices=[(rt.value, f"{rt.label} Round") for rt in RoundType],
                             default=RoundType.TECHNICAL.value)
    # round type the ratings on screen were rendered for
    shown_type = HiddenField()
    # entered by hand for hr rounds, derived from the ratings otherwise
    score = FloatField("Score (0-100)", validators=[Optional(), NumberRange(min=0, max=100)])
    feedback = TextAreaField("Feedback / Notes", render_kw={"rows": 3, "placeholder": "Enter interview feedback..."})
    scheduled_at = DateTimeLocalField("Scheduled At", format='%Y-%m-%dT%H:%M', validators=[Optional()])
    preview = SubmitField("Recalculate")
    submit = SubmitField("Save Result")

    def ratings(self, keys):
        return [getattr(self, key) for key in keys]

    def rating_values(self, keys):
        return {key: getattr(self, key).data for key in keys}


# one 0-10 field per category, clamped on save; only the chosen round's are read
for _key in TECHNICAL_CATEGORIES + DIRECTOR_CATEGORIES:
    setattr(InterviewForm, _key, FloatField(category_label(_key), default=0,
                                            validators=[Optional()], render_kw={"min": 0, "max": 10, "step": 1}))
