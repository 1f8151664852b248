from flask_wtf import FlaskForm
from wtforms import SelectField


class CalendarViewForm(FlaskForm):
    class Meta:
        csrf = False          # GET form, no mutation

    region = SelectField("Region", choices=[("general", "General Roman Calendar")], coerce=str, default="general")


REGION_LABELS = {
    "general": "General Roman Calendar",
    "india": "India",
}


def region_choices(regions):
    return [(region, REGION_LABELS.get(region, region.title())) for region in regions]
