from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..reports.serializers import work_history_to_dict


def register(app: Flask, container: Container) -> None:
    @app.route("/personal/<int:worker_id>/work-history", methods=["GET"], endpoint="personal_work_history")
    def personal_work_history(worker_id: int):
        history = container.report_service.work_history(worker_id)
        return jsonify(work_history_to_dict(history))
