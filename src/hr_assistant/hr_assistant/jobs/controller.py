from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.results import handle_form
from ..common.validators import validate_form
from ..common.web import current_actor, form_payload, respond, roles_required
from ..container import Container
from ..core.enums import Role
from .forms import ApplyForJobForm, CreateJobForm, DeleteJobForm


def register(app: Flask, container: Container) -> None:
    service = container.job_service

    @app.route("/api/jobs", methods=["GET"], endpoint="list_jobs")
    def list_jobs():
        return jsonify({"jobs": service.list_postings()})

    @app.route("/api/jobs/<job_id>", methods=["GET"], endpoint="get_job")
    def get_job(job_id: str):
        return jsonify({"job": service.get_posting(job_id)})

    @app.route("/api/jobs", methods=["POST"], endpoint="create_job")
    @roles_required(Role.ADMIN, Role.HR)
    def create_job():
        payload = form_payload()
        result = handle_form(
            lambda: service.create_posting(validate_form(CreateJobForm, payload), actor=current_actor()),
            success=f'Job opening "{payload.get("title")}" created successfully.',
            failure="Failed to create job opening. An unexpected error occurred.",
            data=lambda job_id: {"jobId": job_id},
        )
        return respond(result)

    @app.route("/api/jobs/delete", methods=["POST"], endpoint="delete_job")
    @roles_required(Role.ADMIN, Role.HR)
    def delete_job():
        payload = form_payload()
        result = handle_form(
            lambda: service.delete_posting(validate_form(DeleteJobForm, payload).job_id, actor=current_actor()),
            success="Job opening deleted successfully.",
            failure="Failed to delete job opening.",
        )
        return respond(result)

    @app.route("/api/jobs/apply", methods=["POST"], endpoint="apply_for_job")
    def apply_for_job():
        payload = form_payload()
        result = handle_form(
            lambda: service.apply(validate_form(ApplyForJobForm, payload)),
            success="Your application has been submitted successfully! We will get back to you soon.",
            failure="Failed to save application to our database. An unexpected error occurred.",
            data=lambda application_id: {"applicationId": application_id},
        )
        return respond(result)

    @app.route("/api/jobs/applications", methods=["GET"], endpoint="list_job_applications")
    @roles_required(Role.ADMIN, Role.HR)
    def list_job_applications():
        return jsonify({"applications": service.list_applications(job_id=request.args.get("jobId") or None)})
