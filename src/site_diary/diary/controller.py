from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body
from ..common.validators import optional_date, optional_datetime, optional_id, optional_text, require_datetime, require_id
from ..container import Container
from ..core.enums import DiaryStatus
from ..core.exceptions import ValidationError
from ..reports.serializers import project_diary_to_dict, worker_diary_to_dict
from .model import DiaryFilter
from .serializers import entry_to_dict


def _parse_status(value):
    if not value:
        return None
    try:
        return DiaryStatus(value)
    except ValueError:
        raise ValidationError("Status must be 'active' or 'completed'")


def register(app: Flask, container: Container) -> None:
    @app.route("/diary", methods=["GET"], endpoint="diary_list")
    def diary_list():
        args = request.args
        criteria = DiaryFilter(
            project_id=optional_id(args.get("project"), "project"),
            worker_id=optional_id(args.get("worker"), "worker"),
            work_date=optional_date(args.get("date"), "date"),
            start_date=optional_date(args.get("startDate"), "startDate"),
            end_date=optional_date(args.get("endDate"), "endDate"),
        )
        entries = container.report_service.list_entries(criteria)
        return jsonify([entry_to_dict(e) for e in entries])

    @app.route("/diary", methods=["POST"], endpoint="diary_clock_in")
    def diary_clock_in():
        data = json_body()
        entry = container.diary_service.clock_in(
            project_id=require_id(data.get("projectId"), "Project ID"),
            worker_id=require_id(data.get("workerId"), "Worker ID"),
            start_time=optional_datetime(data.get("startTime"), "Start time"),
            end_time=optional_datetime(data.get("endTime"), "End time"),
            notes=optional_text(data.get("notes")),
            is_maestro=bool(data.get("isMaestro") or False),
        )
        return jsonify(entry_to_dict(entry)), 201

    @app.route("/diary/clock-out", methods=["PUT"], endpoint="diary_clock_out")
    def diary_clock_out():
        data = json_body()
        entry = container.diary_service.clock_out(
            project_id=require_id(data.get("projectId"), "Project ID"),
            worker_id=require_id(data.get("workerId"), "Worker ID"),
            end_time=optional_datetime(data.get("endTime"), "End time"),
            notes=optional_text(data.get("notes")),
        )
        return jsonify(entry_to_dict(entry))

    @app.route("/diary/<int:entry_id>", methods=["GET"], endpoint="diary_get")
    def diary_get(entry_id: int):
        return jsonify(entry_to_dict(container.diary_service.get_entry(entry_id)))

    @app.route("/diary/<int:entry_id>", methods=["PUT"], endpoint="diary_update")
    def diary_update(entry_id: int):
        data = json_body()
        # "status" may be sent by older clients; it is derived from endTime and ignored here.
        entry = container.diary_service.update_entry(
            entry_id,
            start_time=require_datetime(data.get("startTime"), "Start time"),
            end_time=optional_datetime(data.get("endTime"), "End time"),
            notes=optional_text(data.get("notes")),
        )
        return jsonify(entry_to_dict(entry))

    @app.route("/diary/<int:entry_id>", methods=["DELETE"], endpoint="diary_delete")
    def diary_delete(entry_id: int):
        container.diary_service.delete_entry(entry_id)
        return jsonify({"message": "Diary entry deleted successfully"})

    @app.route("/diary/project/<int:project_id>", methods=["GET"], endpoint="diary_project")
    def diary_project(project_id: int):
        view = container.report_service.project_diary(
            project_id,
            work_date=optional_date(request.args.get("date"), "date"),
            status=_parse_status(request.args.get("status")),
        )
        return jsonify(project_diary_to_dict(view))

    @app.route("/diary/worker/<int:worker_id>", methods=["GET"], endpoint="diary_worker")
    def diary_worker(worker_id: int):
        args = request.args
        view = container.report_service.worker_diary(
            worker_id,
            project_id=optional_id(args.get("project"), "project"),
            work_date=optional_date(args.get("date"), "date"),
            start_date=optional_date(args.get("startDate"), "startDate"),
            end_date=optional_date(args.get("endDate"), "endDate"),
        )
        return jsonify(worker_diary_to_dict(view))
