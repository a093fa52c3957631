import logging
import os

from flask import Flask, current_app, jsonify, request

from emi_calc.data_models import ScheduleInput
from emi_calc.engine import baseline_input, compare_schedules, generate_schedule
from emi_calc.formatter import row_dict, summary_dict
from emi_calc.utils import coerce_month_map
from emi_calc.validation import ScheduleInputError, validate_schedule_input

logger = logging.getLogger(__name__)

# JSON field name -> ScheduleInput attribute; the EMI form posts camelCase.
FIELD_ALIASES = {
    "principal": "principal",
    "loanAmount": "principal",
    "annual_rate_percent": "annual_rate_percent",
    "rateOfInterest": "annual_rate_percent",
    "tenure_months": "tenure_months",
    "tenureMonths": "tenure_months",
    "yearly_hike_percent": "yearly_hike_percent",
    "hikePercentage": "yearly_hike_percent",
    "prepayments": "prepayments",
    "floating_rate_changes": "floating_rate_changes",
    "floatingRates": "floating_rate_changes",
}


def _whole_number(value, field: str, message: str) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ScheduleInputError({field: message}) from exc
    if not number.is_integer():
        raise ScheduleInputError({field: message})
    return int(number)


def _payload_to_input(payload: dict) -> ScheduleInput:
    values = {}
    for key, value in payload.items():
        attr = FIELD_ALIASES.get(key)
        if attr is not None:
            values[attr] = value
    # Stored loans carry tenure in years.
    if "tenure_months" not in values and payload.get("tenure") is not None:
        values["tenure_months"] = _whole_number(payload["tenure"], "tenure", "Tenure must be a whole number of years") * 12

    missing = [name for name in ("principal", "annual_rate_percent", "tenure_months") if name not in values]
    if missing:
        raise ScheduleInputError({name: "This field is required" for name in missing})
    tenure_months = _whole_number(values["tenure_months"], "tenure_months", "Tenure must be a whole number of months")
    try:
        floating_rate_changes = coerce_month_map(values.get("floating_rate_changes") or {})
    except ValueError as exc:
        raise ScheduleInputError({"floating_rate_changes": str(exc)}) from exc
    # A zero rate is how the form leaves a month without a reset.
    floating_rate_changes = {month: rate for month, rate in floating_rate_changes.items() if rate != 0}
    try:
        return ScheduleInput(
            principal=float(values["principal"]),
            annual_rate_percent=float(values["annual_rate_percent"]),
            tenure_months=tenure_months,
            yearly_hike_percent=float(values.get("yearly_hike_percent") or 0),
            prepayments=coerce_month_map(values.get("prepayments") or {}),
            floating_rate_changes=floating_rate_changes,
        )
    except (TypeError, ValueError) as exc:
        raise ScheduleInputError({"payload": str(exc)}) from exc


def _read_input() -> ScheduleInput:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ScheduleInputError({"payload": "Expected a JSON object"})
    schedule_input = _payload_to_input(payload)
    validate_schedule_input(schedule_input, max_tenure_months=current_app.config["MAX_TENURE_MONTHS"])
    return schedule_input


def _schedule_for_view(rows: list, show_full_schedule: bool):
    """Serialize rows, truncating to the configured preview length unless asked not to."""
    if show_full_schedule:
        return [row_dict(r) for r in rows], 0
    preview = rows[: current_app.config["PREVIEW_ROWS"]]
    return [row_dict(r) for r in preview], len(rows) - len(preview)


def create_app() -> Flask:
    flask_app = Flask(__name__)
    flask_app.config["MAX_TENURE_MONTHS"] = int(os.environ.get("EMI_CALC_MAX_TENURE_MONTHS", "360"))
    flask_app.config["PREVIEW_ROWS"] = int(os.environ.get("EMI_CALC_PREVIEW_ROWS", "120"))

    @flask_app.errorhandler(ScheduleInputError)
    def handle_invalid_input(exc: ScheduleInputError):
        logger.info("Rejected schedule request: %s", exc)
        return jsonify({"error": str(exc), "fields": exc.fields}), 400

    @flask_app.get("/healthz")
    def healthz():
        return jsonify({"status": "ok"})

    @flask_app.post("/api/schedule")
    def schedule():
        result = generate_schedule(_read_input())
        show_full_schedule = request.args.get("full") == "1"
        rows, truncated = _schedule_for_view(result.rows, show_full_schedule)
        summary = summary_dict(result)
        if truncated:
            summary["truncated"] = truncated
        return jsonify({"summary": summary, "schedule": rows})

    @flask_app.post("/api/compare")
    def compare():
        plan_input = _read_input()
        plan = generate_schedule(plan_input)
        baseline = generate_schedule(baseline_input(plan_input))
        return jsonify(
            {
                "summary": summary_dict(plan),
                "baseline": summary_dict(baseline),
                "comparison": compare_schedules(baseline, plan),
            }
        )

    return flask_app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Starting EMI calculator API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
