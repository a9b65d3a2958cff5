from __future__ import annotations

import hmac
import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, send_file

from ..common.payloads import deduction_settings_to_payload, normalize_id, salary_calculation_to_payload
from ..container import Container
from ..core.constants import DEFAULT_LIST_LIMIT, DEFAULT_PERIOD_HISTORY
from ..core.exceptions import (
    AuthorizationError,
    CalculationLocked,
    DomainError,
    InvalidTransition,
    NotFoundError,
    ValidationError,
)
from .model import CalculationSummary
from .period import PayPeriod

logger = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _status_code(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, (CalculationLocked, InvalidTransition)):
        return 409
    if isinstance(error, AuthorizationError):
        return 403
    return 400


def _period_payload(p: PayPeriod) -> dict:
    return {
        "period": p.period,
        "label": p.label,
        "periodStart": p.period_start.isoformat(),
        "periodEnd": p.period_end.isoformat(),
        "paymentDate": p.payment_date.isoformat(),
    }


def _summary_payload(s: CalculationSummary) -> dict:
    return {
        "period": s.period,
        "successfulCalculations": s.successful_calculations,
        "skippedLocked": s.skipped_locked,
        "failedCalculations": len(s.failed),
        "failures": [{"employeeId": f.employee_id, "message": f.message} for f in s.failed],
        "totalSalaryAmount": s.total_salary_amount,
        "totalDeductions": s.total_deductions,
    }


def register(app: Flask, container: Container) -> None:
    salaries = container.salary_service
    settings_service = container.salary_settings_service

    def api_token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            expected = app.config.get("API_TOKEN")
            if expected:
                header = request.headers.get("Authorization", "")
                token = header[7:] if header.startswith("Bearer ") else ""
                if not hmac.compare_digest(token.encode("utf-8"), str(expected).encode("utf-8")):
                    raise AuthorizationError("Invalid or missing API token")
            return view(*args, **kwargs)

        return wrapper

    def json_errors(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                body = {"success": False, "message": e.message, **e.context()}
                return jsonify(body), _status_code(e)
            except Exception:
                logger.exception("Unhandled error in %s", request.path)
                return jsonify({"success": False, "message": "Internal server error"}), 500

        return wrapper

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _list_filters() -> dict:
        args = request.args
        try:
            page = int(args.get("page", 1))
            limit = int(args.get("limit", DEFAULT_LIST_LIMIT))
        except ValueError:
            raise ValidationError("page and limit must be integers", field="page")
        return {
            "period": args.get("period") or None,
            "status": args.get("status") or None,
            "page": page,
            "limit": limit,
        }

    @app.route("/api/salary", methods=["GET"], endpoint="salary_list")
    @json_errors
    @api_token_required
    def salary_list():
        items = salaries.list(employee_id=request.args.get("employeeId") or None, **_list_filters())
        return jsonify({"success": True, "data": [salary_calculation_to_payload(c) for c in items]})

    @app.route("/api/salary/periods", methods=["GET"], endpoint="salary_periods")
    @json_errors
    @api_token_required
    def salary_periods():
        count = app.config.get("PERIOD_HISTORY_COUNT", DEFAULT_PERIOD_HISTORY)
        periods = salaries.list_periods(count=int(count))
        return jsonify({"success": True, "data": [_period_payload(p) for p in periods]})

    @app.route("/api/salary/calculate", methods=["POST"], endpoint="salary_calculate")
    @json_errors
    @api_token_required
    def salary_calculate():
        body = _json_body()
        calc = salaries.calculate(
            employee_id=normalize_id(body.get("employeeId"), "employeeId"),
            period=str(body.get("period") or ""),
        )
        return jsonify({"success": True, "data": salary_calculation_to_payload(calc)})

    @app.route("/api/salary/calculate-all", methods=["POST"], endpoint="salary_calculate_all")
    @json_errors
    @api_token_required
    def salary_calculate_all():
        body = _json_body()
        summary = salaries.calculate_all(period=str(body.get("period") or ""))
        return jsonify({"success": True, "summary": _summary_payload(summary)})

    @app.route("/api/salary/preview", methods=["POST"], endpoint="salary_preview")
    @json_errors
    @api_token_required
    def salary_preview():
        body = _json_body()
        calc = salaries.preview(
            employee_id=normalize_id(body.get("employeeId"), "employeeId"),
            period=str(body.get("period") or ""),
        )
        return jsonify({"success": True, "data": salary_calculation_to_payload(calc)})

    @app.route("/api/salary/export", methods=["GET"], endpoint="salary_export")
    @json_errors
    @api_token_required
    def salary_export():
        period = request.args.get("period") or ""
        content = salaries.export_period(period=period, status=request.args.get("status") or None)
        return send_file(
            io.BytesIO(content),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"salary_report_{period}.xlsx",
        )

    @app.route("/api/salary/employee/<employee_id>", methods=["GET"], endpoint="salary_by_employee")
    @json_errors
    @api_token_required
    def salary_by_employee(employee_id: str):
        items = salaries.list_for_employee(employee_id=employee_id, **_list_filters())
        return jsonify({"success": True, "data": [salary_calculation_to_payload(c) for c in items]})

    @app.route("/api/salary/<calculation_id>", methods=["GET"], endpoint="salary_detail")
    @json_errors
    @api_token_required
    def salary_detail(calculation_id: str):
        calc = salaries.get(calculation_id)
        return jsonify({"success": True, "data": salary_calculation_to_payload(calc)})

    @app.route("/api/salary/<calculation_id>/breakdown", methods=["GET"], endpoint="salary_breakdown")
    @json_errors
    @api_token_required
    def salary_breakdown(calculation_id: str):
        return jsonify({"success": True, "data": salaries.breakdown(calculation_id)})

    @app.route("/api/salary/<calculation_id>/status", methods=["PUT"], endpoint="salary_update_status")
    @json_errors
    @api_token_required
    def salary_update_status(calculation_id: str):
        body = _json_body()
        calc = salaries.update_status(calculation_id=calculation_id, status=str(body.get("status") or ""))
        return jsonify({"success": True, "data": salary_calculation_to_payload(calc)})

    @app.route("/api/salary-settings", methods=["GET"], endpoint="salary_settings_get")
    @json_errors
    @api_token_required
    def salary_settings_get():
        return jsonify({"success": True, "data": deduction_settings_to_payload(settings_service.get())})

    @app.route("/api/salary-settings", methods=["PUT"], endpoint="salary_settings_update")
    @json_errors
    @api_token_required
    def salary_settings_update():
        updated = settings_service.update(_json_body())
        return jsonify({"success": True, "data": deduction_settings_to_payload(updated)})
