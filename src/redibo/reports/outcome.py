"""Client-side reflection of server report decisions.

The daily limit and the one-report-per-renter rule are enforced by the
server; these helpers only classify what it answered.
"""

from typing import Any, Dict, Iterable, Optional

from .report_models import DAILY_REPORT_LIMIT, ReportOutcome, ReportSubmission

REJECTED_STATE = "RECHAZADO"

DAILY_LIMIT_MARKER = "límite de reportes"
ALREADY_REPORTED_MARKER = "reportado a este usuario"

OUTCOME_MESSAGES = {
    ReportOutcome.SUBMITTED: (
        "Reporte enviado. Su reporte ha sido enviado correctamente y será revisado por nuestro equipo."
    ),
    ReportOutcome.ALREADY_REPORTED: "Ya has reportado a este usuario anteriormente",
    ReportOutcome.DAILY_LIMIT_REACHED: (
        f"Has alcanzado el límite de reportes por día ({DAILY_REPORT_LIMIT} reportes/24 horas)."
    ),
    ReportOutcome.REJECTED: "No se pudo enviar el reporte",
}


def has_active_report(reports: Iterable[Any]) -> bool:
    """True if any earlier report for this renter was not rejected."""
    for report in reports:
        if isinstance(report, dict) and report.get("estado") != REJECTED_STATE:
            return True
    return False


def classify_submission(status_code: int, body: Optional[Dict]) -> ReportSubmission:
    """
    Map the server's answer to a report POST onto a ReportOutcome.

    Args:
        status_code: HTTP status of the response
        body: Decoded JSON body (may be None or lack ``error``)

    Returns:
        ReportSubmission with the outcome and a user-facing message
    """
    if 200 <= status_code < 300:
        return ReportSubmission(
            outcome=ReportOutcome.SUBMITTED,
            status_code=status_code,
            message=OUTCOME_MESSAGES[ReportOutcome.SUBMITTED],
        )

    error = ""
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        error = body["error"]

    if DAILY_LIMIT_MARKER in error:
        outcome = ReportOutcome.DAILY_LIMIT_REACHED
    elif ALREADY_REPORTED_MARKER in error:
        outcome = ReportOutcome.ALREADY_REPORTED
    else:
        outcome = ReportOutcome.REJECTED

    message = OUTCOME_MESSAGES[outcome]
    if outcome is ReportOutcome.REJECTED and error:
        message = error
    return ReportSubmission(outcome=outcome, status_code=status_code, message=message)
