from datetime import date, timedelta

from flask import Blueprint, abort, redirect, render_template, request, url_for

from ..liturgical import format_liturgical_date, get_liturgical_day, is_supported_year, month_grid_cells
from ..liturgical.dates import MONTH_NAMES, WEEKDAY_NAMES
from ..readings import ReadingsUnavailable, get_readings
from .forms import DatePickerForm
from .helpers import display_color, grid_weeks, next_month, previous_month

main_bp = Blueprint("main", __name__)

ONE_DAY = timedelta(days=1)


def _today():
    return date.today()


@main_bp.route("/")
def index():
    form = DatePickerForm(request.args)
    if request.args.get("date"):
        if form.validate() and form.date.data:
            return redirect(url_for("main.day", date_str=form.date.data.isoformat()))
        abort(400)
    return _render_day(_today(), form)


@main_bp.route("/day/<date_str>")
def day(date_str):
    try:
        selected = date.fromisoformat(date_str)
    except ValueError:
        abort(404)
    if not is_supported_year(selected.year):
        abort(404)
    return _render_day(selected, DatePickerForm(data={"date": selected}))


def _render_day(selected, form):
    liturgical_day = get_liturgical_day(selected)

    readings_error = None
    try:
        readings, _cached = get_readings(selected)
    except ReadingsUnavailable as exc:
        readings = exc.fallback
        readings_error = str(exc)

    year, month = selected.year, selected.month
    prev_year, prev_month = previous_month(year, month)
    next_year, following_month = next_month(year, month)
    # Stay inside the supported range when linking to neighbouring days
    prev_day = selected - ONE_DAY if is_supported_year((selected - ONE_DAY).year) else None
    next_day = selected + ONE_DAY if is_supported_year((selected + ONE_DAY).year) else None

    return render_template(
        "day.html",
        form=form,
        selected=selected,
        today=_today(),
        liturgical_day=liturgical_day,
        heading=format_liturgical_date(selected),
        color_name=display_color(liturgical_day.color),
        readings=readings,
        readings_error=readings_error,
        weeks=grid_weeks(month_grid_cells(year, month)),
        month_label=f"{MONTH_NAMES[month - 1]} {year}",
        weekday_labels=[name[:3] for name in WEEKDAY_NAMES],
        prev_day=prev_day,
        next_day=next_day,
        prev_month_first=date(prev_year, prev_month, 1) if is_supported_year(prev_year) else None,
        next_month_first=date(next_year, following_month, 1) if is_supported_year(next_year) else None,
        display_color=display_color,
    )
