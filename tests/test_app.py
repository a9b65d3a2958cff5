import logging

from src.payroll_system.payroll_system.common.logging_utils import PACKAGE_LOGGER, configure_logging
from src.payroll_system.payroll_system.main import create_app


def test_create_app_registers_salary_routes(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("AUTO_INIT_DB", "0")
    monkeypatch.setenv("AUTO_SEED_DB", "0")

    app = create_app()

    endpoints = {rule.endpoint for rule in app.url_map.iter_rules()}
    assert {"salary_calculate", "salary_calculate_all", "salary_update_status", "salary_settings_update"} <= endpoints
    assert app.config["API_TOKEN"] == "test-token"

    resp = app.test_client().get("/api/salary/periods")
    assert resp.status_code == 403


def test_configure_logging_is_idempotent():
    configure_logging("DEBUG")
    configure_logging("WARNING")

    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = [h for h in logger.handlers if getattr(h, "_payroll_handler", False)]
    assert len(handlers) == 1
    assert logger.level == logging.WARNING
