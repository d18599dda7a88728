from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import auth_guards
from ..common.http import json_body
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = auth_guards(container.auth_service)

    @app.route("/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def list_employees():
        return jsonify([e.to_dict() for e in container.employee_service.list_all()])

    @app.route("/employees/scheduled-today", methods=["GET"], endpoint="employees_scheduled_today")
    @login_required
    def scheduled_today():
        return jsonify([e.to_dict() for e in container.employee_service.scheduled_on()])

    @app.route("/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def get_employee(employee_id: int):
        return jsonify(container.employee_service.get(employee_id).to_dict())

    @app.route("/employees", methods=["POST"], endpoint="employees_create")
    @roles_required(Role.ADMIN)
    def create_employee():
        body = json_body()
        employee = container.employee_service.create(
            name=body.get("name") or "",
            position=body.get("position") or "",
            registration=str(body.get("registration") or ""),
            work_days=body.get("workDays") or [],
        )
        app.logger.info("employee created id=%s registration=%s", employee.employee_id, employee.registration)
        return jsonify(employee.to_dict()), 201

    @app.route("/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @roles_required(Role.ADMIN)
    def update_employee(employee_id: int):
        body = json_body()
        is_active = body.get("isActive")
        if is_active is not None and not isinstance(is_active, bool):
            raise ValidationError("isActive deve ser verdadeiro ou falso")

        registration = body.get("registration")
        employee = container.employee_service.update(
            employee_id,
            name=body.get("name"),
            position=body.get("position"),
            registration=str(registration) if registration is not None else None,
            work_days=body.get("workDays"),
            is_active=is_active,
        )
        return jsonify(employee.to_dict())

    @app.route("/employees/<int:employee_id>", methods=["DELETE"], endpoint="employees_delete")
    @roles_required(Role.ADMIN)
    def delete_employee(employee_id: int):
        removed = container.employee_service.delete(employee_id)
        app.logger.info("employee deleted id=%s records_removed=%s", employee_id, removed)
        return jsonify({"success": True, "message": "Funcionário removido", "deletedRecords": removed})
