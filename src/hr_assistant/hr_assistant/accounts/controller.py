from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.results import FormResult, handle_form
from ..common.validators import validate_form
from ..common.web import current_actor, form_payload, login_required, respond, roles_required
from ..container import Container
from ..core.enums import Role
from .forms import CreateLoginForm, DeleteLoginForm, LoginForm


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = form_payload()
        result = handle_form(
            lambda: container.auth_service.authenticate(validate_form(LoginForm, payload)),
            success=lambda user: f"Welcome back, {user.display_name}.",
            failure="Login failed. Please try again.",
            data=lambda user: {"user": user},
        )
        if result.success:
            user = result.data["user"]
            session.clear()
            session["uid"] = user.uid
            session["email"] = user.email
            session["role"] = user.role.value
            session["display_name"] = user.display_name
            session["employee_doc_id"] = user.employee_doc_id
        return respond(result)

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return respond(FormResult.ok("Signed out."))

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "uid": session.get("uid"),
                "email": session.get("email"),
                "role": session.get("role"),
                "displayName": session.get("display_name"),
                "employeeDocId": session.get("employee_doc_id"),
            }
        )

    @app.route("/api/accounts", methods=["POST"], endpoint="create_login")
    @roles_required(Role.ADMIN, Role.HR)
    def create_login():
        payload = form_payload()
        result = handle_form(
            lambda: container.account_service.create_login(
                validate_form(CreateLoginForm, payload), actor=current_actor()
            ),
            success="Login created and linked to the employee.",
            failure="Failed to create login. An unexpected error occurred.",
            data=lambda uid: {"uid": uid},
        )
        return respond(result)

    @app.route("/api/accounts/delete", methods=["POST"], endpoint="delete_login")
    @roles_required(Role.ADMIN, Role.HR)
    def delete_login():
        payload = form_payload()
        result = handle_form(
            lambda: container.account_service.delete_login(
                validate_form(DeleteLoginForm, payload), actor=current_actor()
            ),
            success=lambda message: message,
            failure="Failed to delete login. An unexpected error occurred.",
        )
        return respond(result)
