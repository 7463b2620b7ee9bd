from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        try:
            employee = container.role_service.get_employee(employee_id)
        except DomainError as e:
            return error_response(e)
        return jsonify(employee.to_dict())
