from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container
from .model import Project


def project_to_dict(p: Project) -> dict:
    return {
        "id": p.project_id,
        "name": p.name,
        "active": p.active,
        "finalized": p.finalized.isoformat() if p.finalized else None,
        "personalRoles": [
            {
                "personalId": a.worker_id,
                "role": (
                    {"id": a.role.role_id, "name": a.role.name, "description": a.role.description, "color": a.role.color}
                    if a.role
                    else None
                ),
                "notes": a.notes,
            }
            for a in p.personal_roles
        ],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/proyectos/<int:project_id>", methods=["GET"], endpoint="project_get")
    def project_get(project_id: int):
        return jsonify(project_to_dict(container.project_service.get_project(project_id)))

    @app.route("/proyectos/<int:project_id>/finalize", methods=["PUT"], endpoint="project_finalize")
    def project_finalize(project_id: int):
        data = json_body()
        project = container.project_service.finalize(project_id, data.get("finalizedDate"))
        return jsonify({"message": "Project finalized successfully", "project": project_to_dict(project)})
