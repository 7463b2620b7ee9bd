from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/matrix", methods=["GET"], endpoint="talent_matrix")
    def talent_matrix():
        try:
            matrix = container.matrix_service.compute_talent_matrix(request.args.get("cycle", ""))
        except DomainError as e:
            return error_response(e)
        return jsonify(matrix.to_dict())

    @app.route("/matrix/employees/<employee_id>", methods=["GET"], endpoint="talent_matrix_employee")
    def employee_position(employee_id: str):
        try:
            position = container.matrix_service.employee_position(employee_id, request.args.get("cycle", ""))
        except DomainError as e:
            return error_response(e)
        return jsonify({"employee_id": employee_id, "position": position.to_dict() if position else None})
