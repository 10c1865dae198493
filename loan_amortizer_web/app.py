import logging
import os
from typing import Mapping

from flask import Flask, jsonify, render_template, request

from loan_amortizer.engine import (
    DEFAULT_ANNUAL_RATE_PERCENT,
    DEFAULT_PRINCIPAL,
    DEFAULT_TERM_MONTHS,
    compute_schedule,
)
from loan_amortizer.formatter import EMPTY_STATE_MESSAGE, format_currency, result_to_dict
from loan_amortizer.utils import format_number, strip_thousands_separators, term_in_years

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.jinja_env.filters["currency"] = format_currency


def _form_values(args: Mapping[str, str]) -> dict:
    """Read the three calculator fields, falling back to the defaults when absent."""
    return {
        "principal": strip_thousands_separators(args.get("principal", DEFAULT_PRINCIPAL).strip()),
        "rate": args.get("rate", DEFAULT_ANNUAL_RATE_PERCENT).strip(),
        "term": args.get("term", DEFAULT_TERM_MONTHS).strip(),
    }


def _run_calculation(args: Mapping[str, str]):
    values = _form_values(args)
    result = compute_schedule(values["principal"], values["rate"], values["term"])
    if result.is_empty:
        logger.debug("No schedule for %s", values)
    return values, result


@app.route("/", methods=["GET"])
def index():
    values, result = _run_calculation(request.args)
    years = term_in_years(values["term"])
    return render_template(
        "index.html",
        principal_display=format_number(values["principal"]),
        rate=values["rate"],
        term=values["term"],
        years=years,
        result=result,
        show_summary=result.monthly_payment > 0,
        empty_message=EMPTY_STATE_MESSAGE,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.get("/api/schedule")
def schedule_json():
    _, result = _run_calculation(request.args)
    return jsonify(result_to_dict(result))


def run_server() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("LOAN_AMORTIZER_HOST", "0.0.0.0")
    port = int(os.environ.get("LOAN_AMORTIZER_PORT", "8710"))
    logger.info("Starting Loan Amortizer web app on http://%s:%s", host, port)
    app.run(host=host, port=port)


if __name__ == "__main__":
    run_server()
