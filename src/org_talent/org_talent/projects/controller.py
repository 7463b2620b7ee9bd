from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, json_field
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/projects/<project_id>/manager", methods=["POST"], endpoint="assign_project_manager")
    def assign_manager(project_id: str):
        try:
            result = container.role_service.assign_manager(
                project_id=project_id,
                candidate_id=json_field("employee_id"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(result.to_dict()), 201

    @app.route("/projects/<project_id>/leader", methods=["POST"], endpoint="assign_project_leader")
    def assign_leader(project_id: str):
        try:
            result = container.role_service.assign_leader(
                project_id=project_id,
                candidate_id=json_field("employee_id"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(result.to_dict()), 201

    @app.route("/projects/<project_id>/collaborators", methods=["POST"], endpoint="add_project_collaborator")
    def add_collaborator(project_id: str):
        try:
            result = container.role_service.add_collaborator(
                employee_id=json_field("employee_id"),
                project_id=project_id,
            )
        except DomainError as e:
            return error_response(e)
        return jsonify(result.to_dict()), 201

    @app.route("/projects/<project_id>/roles", methods=["GET"], endpoint="list_project_roles")
    def list_roles(project_id: str):
        try:
            roles = container.role_service.list_project_roles(project_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"project_id": project_id, "roles": [r.to_dict() for r in roles]})
