"""Integration tests running the interceptors inside a FastAPI application."""

from unittest.mock import Mock

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from shieldlog.application.chain import InterceptorChain
from shieldlog.application.config import Settings
from shieldlog.application.logging_middleware import LoggingMiddleware
from shieldlog.application.runtime_state import RuntimeState
from shieldlog.application.security_headers import SecurityHeadersMiddleware
from shieldlog.domain.value_objects import LoggingConfig, MiddlewareResult, SecurityHeadersConfig
from shieldlog.infrastructure.bootstrap import build_chain, install
from shieldlog.infrastructure.logging import StructlogRequestLogger
from shieldlog.infrastructure.middleware import InterceptorMiddleware


def create_app() -> FastAPI:
    app = FastAPI()

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/users")
    def users(request: Request):
        return {"start": getattr(request.state, "request_start_time", None)}

    return app


def client_for(chain: InterceptorChain) -> TestClient:
    app = create_app()
    app.add_middleware(InterceptorMiddleware, chain=chain)
    return TestClient(app)


class TestLoggingThroughApp:
    """Test request logging end to end."""

    def setup_method(self):
        self.state = RuntimeState()
        self.request_logger = Mock()
        settings = Settings({"LOG_EXCLUDE_PATHS": "/health"})
        self.client = client_for(build_chain(settings, request_logger=self.request_logger, state=self.state))

    def test_logged_request_gets_start_time(self):
        response = self.client.get("/api/users")

        assert response.status_code == 200
        start = response.json()["start"]
        assert start is not None and start.isdigit()
        self.request_logger.from_request.assert_called_once()
        self.request_logger.from_request.return_value.log.assert_called_once_with()

    def test_failing_log_sink_does_not_fail_request(self):
        self.request_logger.from_request.return_value.log.side_effect = RuntimeError("sink down")

        response = self.client.get("/api/users")

        assert response.status_code == 200
        assert response.json()["start"] is not None

    def test_excluded_path_is_not_logged(self):
        response = self.client.get("/health")

        assert response.status_code == 200
        self.request_logger.from_request.assert_not_called()

    def test_unset_state_still_serves(self):
        self.state.reset()

        response = self.client.get("/api/users")

        assert response.status_code == 200
        assert response.json() == {"start": None}

    def test_structlog_entry_emitted(self):
        self.state.set_logger(StructlogRequestLogger())

        with capture_logs() as logs:
            self.client.get("/api/users", headers={"X-Request-Id": "req_it"})

        entries = [log for log in logs if log["event"] == "Request received"]
        assert len(entries) == 1
        assert entries[0]["path"] == "/api/users"
        assert entries[0]["request_id"] == "req_it"


class TestSecurityHeadersThroughApp:
    """Test security headers end to end."""

    def test_default_headers(self):
        chain = SecurityHeadersMiddleware().register(InterceptorChain())

        response = client_for(chain).get("/health")

        assert response.headers["x-content-type-options"] == "nosniff"
        assert response.headers["x-frame-options"] == "DENY"
        assert response.headers["x-xss-protection"] == "1; mode=block"
        assert response.headers["strict-transport-security"] == "max-age=31536000"
        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"
        assert "content-security-policy" not in response.headers

    def test_disabled_headers(self):
        chain = SecurityHeadersMiddleware(SecurityHeadersConfig.disabled()).register(InterceptorChain())

        response = client_for(chain).get("/health")

        assert "x-frame-options" not in response.headers
        assert "strict-transport-security" not in response.headers

    def test_aborted_request_answers_unauthorized_without_hooks(self):
        guard = Mock(return_value=MiddlewareResult.ABORT)
        response_hook = Mock(side_effect=lambda resp, req: resp)
        chain = InterceptorChain().use_pre_request(guard).use_response(response_hook)
        SecurityHeadersMiddleware().register(chain)

        response = client_for(chain).get("/api/users")

        assert response.status_code == 401
        assert response.content == b""
        assert "x-frame-options" not in response.headers
        response_hook.assert_not_called()


class TestInstall:
    """Test startup wiring."""

    def test_install_wires_both_interceptors(self, restore_root_logging):
        app = create_app()
        state = RuntimeState()
        request_logger = Mock()
        settings = Settings(
            {
                "ENVIRONMENT": "test",
                "LOG_EXCLUDE_PATHS": "/health",
                "HSTS_MAX_AGE": "63072000",
            }
        )

        chain = install(app, settings=settings, request_logger=request_logger, state=state)
        client = TestClient(app)

        assert chain.pre_request_count == 1
        assert chain.response_count == 2
        assert state.get_config() == settings.logging_config()
        assert state.get_logger() is request_logger

        response = client.get("/api/users")
        assert response.headers["strict-transport-security"] == "max-age=63072000"
        request_logger.from_request.assert_called_once()

    def test_logging_hooks_share_published_config(self):
        state = RuntimeState()
        mw = LoggingMiddleware(LoggingConfig(log_requests=False), state=state)
        mw.set_global_logger(Mock())
        mw.set_global_config()
        client = client_for(mw.register(InterceptorChain()))

        assert client.get("/api/users").json() == {"start": None}
