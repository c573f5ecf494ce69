import logging
import os
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, render_template, request

from repayment_calc.data_models import LoanTerms
from repayment_calc.engine import compute_schedule, generate_schedule
from repayment_calc.preview import preview
from repayment_calc.utils import parse_iso_date, to_decimal
from repayment_calc.validation import ValidationError, validate_terms
from repayment_calc_web.repayment_store import create_store_from_env

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
repayment_store = create_store_from_env(os.environ.get("REPAYMENT_DATABASE_URL"))


def _terms_from_values(principal: Any, rate: Any, start_date: Any, maturity_date: Any) -> LoanTerms:
    """Build ``LoanTerms`` from raw form or JSON values.

    Raises ``ValueError`` when a value is missing or malformed.
    """
    if principal in (None, "") or rate in (None, "") or not start_date or not maturity_date:
        raise ValueError("Missing required fields: principal, interestRate, startDate and maturityDate are required")
    return LoanTerms(
        principal=to_decimal(principal),
        rate=to_decimal(rate),
        start_date=parse_iso_date(start_date),
        maturity_date=parse_iso_date(maturity_date),
    )


def _form_to_terms(form) -> LoanTerms:
    return _terms_from_values(
        form.get("principal", "").strip(),
        form.get("rate", "").strip(),
        form.get("start_date", "").strip(),
        form.get("maturity_date", "").strip(),
    )


def _json_to_terms(payload: Dict[str, Any]) -> LoanTerms:
    return _terms_from_values(
        payload.get("principal"),
        payload.get("interestRate"),
        payload.get("startDate"),
        payload.get("maturityDate"),
    )


def _serialize_schedule(schedule):
    """Convert installments into JSON-serialisable dictionaries."""
    serialized = []
    for entry in schedule:
        serialized.append(
            {
                "period": entry.period,
                "dueDate": entry.due_date.isoformat(),
                "amountDue": float(entry.amount_due),
                "isLastPayment": entry.is_last_payment,
            }
        )
    return serialized


def _error_response(message: str, code: str, status: int = 400) -> Tuple[Any, int]:
    return jsonify({"error": message, "code": code}), status


def _validated_terms_from_request() -> LoanTerms:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    terms = _json_to_terms(payload)
    error = validate_terms(terms)
    if error is not None:
        raise error
    return terms


@app.route("/", methods=["GET", "POST"])
def index():
    summary = None
    schedule = None
    expected = None
    error = None

    if request.method == "POST":
        try:
            terms = _form_to_terms(request.form)
            schedule, summary = compute_schedule(terms)
            expected = preview(terms)
        except ValueError as exc:
            error = str(exc)

    return render_template(
        "index.html",
        summary=summary,
        schedule=schedule,
        preview=expected,
        error=error,
        form=request.form,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/api/schedule")
def api_schedule():
    try:
        terms = _validated_terms_from_request()
    except ValidationError as exc:
        return _error_response(exc.message, exc.code)
    except ValueError as exc:
        return _error_response(str(exc), "invalid_input")
    schedule = generate_schedule(terms.principal, terms.rate, terms.start_date, terms.maturity_date)
    return jsonify(_serialize_schedule(schedule))


@app.get("/api/loans")
def list_loans():
    return jsonify(repayment_store.list_loans())


@app.post("/api/loans")
def create_loan():
    try:
        terms = _validated_terms_from_request()
    except ValidationError as exc:
        return _error_response(exc.message, exc.code)
    except ValueError as exc:
        return _error_response(str(exc), "invalid_input")
    borrower = str(request.get_json().get("borrower") or "").strip()
    if not borrower:
        return _error_response("Missing required field: borrower", "invalid_input")

    schedule = generate_schedule(terms.principal, terms.rate, terms.start_date, terms.maturity_date)
    loan = repayment_store.create_loan(borrower, terms, schedule)
    logger.info("Loan %s created with %d scheduled repayments", loan["id"], len(loan["repayments"]))
    return jsonify(loan), 201


@app.get("/api/loans/<int:loan_id>")
def get_loan(loan_id: int):
    loan = repayment_store.get_loan(loan_id)
    if loan is None:
        return _error_response("Loan not found", "not_found", 404)
    return jsonify(loan)


@app.post("/api/repayments/<int:repayment_id>/payment")
def record_payment(repayment_id: int):
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    try:
        amount_paid = to_decimal(payload.get("amountPaid", ""))
        paid_on = parse_iso_date(payload.get("paymentDate", ""))
    except ValueError as exc:
        return _error_response(str(exc), "invalid_input")
    if amount_paid <= 0:
        return _error_response("Amount paid must be greater than 0", "invalid_input")

    repayment = repayment_store.record_payment(repayment_id, amount_paid, paid_on)
    if repayment is None:
        return _error_response("Repayment not found", "not_found", 404)
    return jsonify(repayment)


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
    logger.info("Starting repayment calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
