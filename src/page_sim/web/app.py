"""Flask application factory for the simulator's web front end.

The ``create_app`` function builds a ``Simulator`` and returns a Flask
app with four endpoints:

- ``GET /`` — render the form page.
- ``POST /api/generate`` — return a random reference string.
- ``POST /api/simulate`` — run one policy and return its fault count.
- ``POST /api/compare`` — run every policy on the same input.

All input checking happens here, before the simulator is called: bad
JSON, missing fields, out-of-range parameters and unknown policies all
answer ``400`` with an ``error`` message.
"""

from __future__ import annotations

import os
from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from page_sim.config import (
    DEFAULT_FRAMES,
    DEFAULT_PAGES,
    Limits,
    ParameterError,
    validate_pages,
    validate_parameters,
)
from page_sim.logging import LogLevel
from page_sim.policies import PolicyKind, UnsupportedPolicyError
from page_sim.refstring import (
    DEFAULT_REFERENCE_STRING,
    InvalidRangeError,
    format_reference_string,
    parse_reference_string,
)
from page_sim.simulator import Simulator, format_result

_HTTP_BAD_REQUEST = 400
_SOURCE = "web"


def _field(data: dict[str, Any], key: str) -> Any:  # noqa: ANN401
    if key not in data:
        msg = f"Missing '{key}' field"
        raise ParameterError(msg)
    return data[key]


def _int_field(data: dict[str, Any], key: str) -> int:
    value = _field(data, key)
    # bool is an int subclass; true/false are not page counts.
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'{key}' must be an integer"
        raise ParameterError(msg)
    return value


def _str_field(data: dict[str, Any], key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        msg = f"'{key}' must be a string"
        raise ParameterError(msg)
    return value


def create_app(simulator: Simulator | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        simulator: The simulator to serve.  When omitted, one is built
            with limits read from the process environment.

    Returns:
        A configured Flask application ready to serve.

    """
    sim = simulator if simulator is not None else Simulator(limits=Limits.from_environment(os.environ))
    limits = sim.limits

    app = Flask(__name__)

    def _reject(exc: Exception) -> tuple[Response, int]:
        sim.logger.log(LogLevel.WARNING, f"{request.path}: {exc}", source=_SOURCE)
        return jsonify({"error": str(exc)}), _HTTP_BAD_REQUEST

    def _json_body() -> dict[str, Any]:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            msg = "Request body must be a JSON object"
            raise ParameterError(msg)
        return data

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the form page."""
        return render_template(
            "index.html",
            reference=DEFAULT_REFERENCE_STRING,
            policies=list(PolicyKind),
            limits=limits,
            num_frames=min(DEFAULT_FRAMES, limits.max_frames),
            num_pages=min(DEFAULT_PAGES, limits.max_pages),
        )

    @app.route("/api/generate", methods=["POST"])
    def generate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return a random reference string over ``num_pages`` page ids.

        Expects JSON body: ``{"num_pages": int}``

        Returns:
            JSON with a ``reference`` field (comma-separated page ids).

        """
        try:
            data = _json_body()
            num_pages = _int_field(data, "num_pages")
            validate_pages(num_pages, limits)
            reference = sim.generate(upper_bound=num_pages)
        except (ParameterError, InvalidRangeError) as exc:
            return _reject(exc)
        return jsonify({"reference": format_reference_string(reference)})

    @app.route("/api/simulate", methods=["POST"])
    def simulate() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run one policy and return its fault count.

        Expects JSON body:
        ``{"reference": str, "num_pages": int, "num_frames": int, "policy": str}``

        Returns:
            JSON with ``faults`` and a human-readable ``message``.

        """
        try:
            data = _json_body()
            reference = parse_reference_string(_str_field(data, "reference"))
            num_pages = _int_field(data, "num_pages")
            num_frames = _int_field(data, "num_frames")
            validate_parameters(num_pages, num_frames, limits)
            faults = sim.run(_str_field(data, "policy"), reference, num_pages, num_frames)
        except (ParameterError, UnsupportedPolicyError) as exc:
            return _reject(exc)
        return jsonify({"faults": faults, "message": format_result(faults)})

    @app.route("/api/compare", methods=["POST"])
    def compare() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run every policy on one reference string.

        Expects JSON body: ``{"reference": str, "num_pages": int, "num_frames": int}``

        Returns:
            JSON with ``faults`` mapping each policy name to its count.

        """
        try:
            data = _json_body()
            reference = parse_reference_string(_str_field(data, "reference"))
            num_pages = _int_field(data, "num_pages")
            num_frames = _int_field(data, "num_frames")
            validate_parameters(num_pages, num_frames, limits)
        except ParameterError as exc:
            return _reject(exc)
        results = sim.compare(reference, num_pages, num_frames)
        return jsonify({"faults": {str(kind): count for kind, count in results.items()}})

    return app


def main() -> None:
    """Run the web front end development server.

    This is the ``page-sim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
