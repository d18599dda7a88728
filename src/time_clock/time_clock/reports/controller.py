from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.auth import auth_guards
from ..common.http import optional_int_arg, required_date_arg
from ..container import Container
from ..core.enums import Role
from .exporters.base import ExportFile
from .service import EmployeeAttendanceSummary


def _summary_json(item: EmployeeAttendanceSummary) -> dict:
    return {
        "employee": item.employee.to_dict(),
        "totalDays": item.total_days,
        "present": item.present,
        "absent": item.absent,
        "extraDays": item.extra_days,
        "presentPercentage": item.present_percentage,
        "absentPercentage": item.absent_percentage,
        "records": [r.to_dict() for r in item.records],
    }


def _download(file: ExportFile):
    return send_file(
        io.BytesIO(file.content),
        mimetype=file.mimetype,
        as_attachment=True,
        download_name=file.filename,
    )


def register(app: Flask, container: Container) -> None:
    _, roles_required = auth_guards(container.auth_service)
    supervisors = (Role.ADMIN, Role.MANAGER)

    def _report():
        return container.report_service.build_attendance_report(
            start=required_date_arg("startDate"),
            end=required_date_arg("endDate"),
            employee_id=optional_int_arg("employeeId"),
        )

    def _rows():
        start = required_date_arg("startDate")
        end = required_date_arg("endDate")
        rows = container.attendance_service.list_rows(
            employee_id=optional_int_arg("employeeId"),
            start_date=start,
            end_date=end,
        )
        return rows, start, end

    @app.route("/time-records/attendance-report", methods=["GET"], endpoint="attendance_report")
    @roles_required(*supervisors)
    def attendance_report():
        return jsonify([_summary_json(item) for item in _report().items])

    @app.route("/time-records/attendance-report/export.xlsx", methods=["GET"], endpoint="attendance_report_xlsx")
    @roles_required(*supervisors)
    def attendance_report_xlsx():
        return _download(container.workbook_exporter.export_report(_report()))

    @app.route("/time-records/export.xlsx", methods=["GET"], endpoint="records_export_xlsx")
    @roles_required(*supervisors)
    def records_export_xlsx():
        rows, start, end = _rows()
        return _download(container.simple_workbook_exporter.export_rows(rows, start=start, end=end))

    @app.route("/time-records/export.csv", methods=["GET"], endpoint="records_export_csv")
    @roles_required(*supervisors)
    def records_export_csv():
        rows, start, end = _rows()
        return _download(container.csv_exporter.export_rows(rows, start=start, end=end))
