from flask_wtf import FlaskForm
from wtforms import DateField
from wtforms.validators import Optional


class DatePickerForm(FlaskForm):
    class Meta:
        csrf = False          # GET form, no mutation

    date = DateField("Date", format="%Y-%m-%d", validators=[Optional()])
