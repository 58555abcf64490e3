# notetodo/common/logging.py
import logging, sys, time, uuid
from pythonjsonlogger import jsonlogger
from flask import g, request

REQUEST_FIELDS = "%(request_id)s %(method)s %(path)s %(status)s %(latency_ms)s %(user_id)s"

def setup_json_logging(app):
    # LOG_LEVEL explicite sinon DEBUG en dev, INFO ailleurs
    default = "DEBUG" if app.debug else "INFO"
    level = getattr(logging, str(app.config.get("LOG_LEVEL") or default).upper(), logging.INFO)
    root = logging.getLogger()
    root.handlers = []  # nettoie
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s " + REQUEST_FIELDS
    ))
    root.addHandler(handler)

def _current_user_id():
    # renseigné par le guard (common.authz) une fois l'identité résolue
    user_id = getattr(g, "user_id", None)
    return str(user_id) if user_id else None

def register_request_logging(app):
    @app.before_request
    def _assign_request_id_and_start_timer():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g._start_time = time.perf_counter()

    @app.after_request
    def _log_request(resp):
        started = getattr(g, "_start_time", None)
        latency = int((time.perf_counter() - started) * 1000) if started else -1

        # expose le request id au client
        resp.headers.setdefault("X-Request-Id", getattr(g, "request_id", "-"))

        logging.getLogger("notetodo.request").info(
            "http_request",
            extra={
                "request_id": getattr(g, "request_id", "-"),
                "method": request.method,
                "path": request.path,
                "status": resp.status_code,
                "latency_ms": latency,
                "user_id": _current_user_id(),
            },
        )
        return resp

    @app.teardown_request
    def _teardown(exc):
        if exc:
            logging.getLogger("notetodo.error").error(
                "request_teardown_error",
                exc_info=exc,
                extra={"request_id": getattr(g, "request_id", "-")},
            )
