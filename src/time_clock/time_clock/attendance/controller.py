from __future__ import annotations

from flask import Flask, jsonify

from ..common.auth import auth_guards
from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.http import json_body, optional_date_arg, optional_int_arg
from ..common.validators import require_positive_int
from ..container import Container
from ..core.enums import AttendanceStatus, Role, ShiftType
from ..core.exceptions import ValidationError

_CLOCK_MESSAGES = {
    "entry": "Entrada registrada com sucesso",
    "exit": "Saída registrada com sucesso",
}


def _enum_field(enum_cls, value, field_name: str, default):
    if value is None or value == "":
        return default
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        raise ValidationError(f"{field_name} inválido: {value}")


def register(app: Flask, container: Container) -> None:
    login_required, roles_required = auth_guards(container.auth_service)
    supervisors = (Role.ADMIN, Role.MANAGER)

    @app.route("/time-records", methods=["GET"], endpoint="records_list")
    @login_required
    def list_records():
        rows = container.attendance_service.list_rows(
            employee_id=optional_int_arg("employeeId"),
            start_date=optional_date_arg("startDate"),
            end_date=optional_date_arg("endDate"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.route("/time-records/today", methods=["GET"], endpoint="records_today")
    @login_required
    def today_records():
        return jsonify([r.to_dict() for r in container.attendance_service.today_rows()])

    @app.route("/time-records/daily-status", methods=["GET"], endpoint="records_daily_status")
    @login_required
    def daily_status():
        summary = container.attendance_service.daily_status(optional_date_arg("date"))
        return jsonify(summary.to_dict())

    @app.route("/time-records/clock", methods=["POST"], endpoint="records_clock")
    @login_required
    def clock():
        body = json_body()
        employee_id = require_positive_int(body.get("employeeId"), "employeeId")
        result = container.attendance_service.clock(employee_id)
        return jsonify({
            "success": True,
            "action": result.action,
            "message": _CLOCK_MESSAGES[result.action],
            "record": result.record.to_dict(),
        })

    @app.route("/time-records", methods=["POST"], endpoint="records_create")
    @roles_required(*supervisors)
    def create_record():
        body = json_body()
        record = container.attendance_service.save_manual_record(
            employee_id=require_positive_int(body.get("employeeId"), "employeeId"),
            work_date=parse_iso_date(body.get("date"), "date"),
            entry_time=parse_hhmm(body.get("entryTime"), "entryTime"),
            exit_time=parse_hhmm(body.get("exitTime"), "exitTime"),
            observations=body.get("observations"),
        )
        return jsonify(record.to_dict()), 201

    @app.route("/time-records/<int:record_id>", methods=["PUT"], endpoint="records_update")
    @roles_required(*supervisors)
    def update_record(record_id: int):
        body = json_body()
        if "observations" not in body:
            raise ValidationError("Informe observations")
        record = container.attendance_service.update_observations(record_id, body.get("observations"))
        return jsonify(record.to_dict())

    @app.route("/time-records/<int:record_id>", methods=["DELETE"], endpoint="records_delete")
    @roles_required(*supervisors)
    def delete_record(record_id: int):
        container.attendance_service.delete_record(record_id)
        return "", 204

    @app.route("/time-records/mark-absence", methods=["POST"], endpoint="records_mark_absence")
    @roles_required(*supervisors)
    def mark_absence():
        body = json_body()
        result = container.attendance_service.mark_absence(
            employee_id=require_positive_int(body.get("employeeId"), "employeeId"),
            work_date=parse_iso_date(body.get("date"), "date"),
            status=_enum_field(AttendanceStatus, body.get("status"), "status", AttendanceStatus.ABSENT),
            observations=body.get("observations"),
            shift=_enum_field(ShiftType, body.get("shift"), "shift", ShiftType.FULL_DAY),
        )
        return jsonify({
            "success": True,
            "overwritten": result.overwritten,
            "record": result.record.to_dict(),
        })

    @app.route("/time-records/generate-absences", methods=["POST"], endpoint="records_generate_absences")
    @roles_required(*supervisors)
    def generate_absences():
        body = json_body()
        target = parse_iso_date(body.get("date"), "date")

        created = container.absence_generator.generate(target)
        return jsonify({
            "success": True,
            "date": target.isoformat(),
            "created": len(created),
            "records": [r.to_dict() for r in created],
        })
