from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.auth import auth_guards
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required, _ = auth_guards(container.auth_service)

    @app.route("/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        body = json_body()
        result = container.auth_service.login(str(body.get("username") or ""), str(body.get("password") or ""))
        app.logger.info("login ok username=%s role=%s", result.user.username, result.user.role.value)
        return jsonify({
            "success": True,
            "token": result.token,
            "expiresIn": result.expires_in,
            "user": result.user.to_dict(),
        })

    @app.route("/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return jsonify(container.auth_service.profile(g.current_user.user_id).to_dict())

    @app.route("/auth/change-password", methods=["POST"], endpoint="auth_change_password")
    @login_required
    def change_password():
        body = json_body()
        container.auth_service.change_password(
            g.current_user.user_id,
            current_password=str(body.get("currentPassword") or ""),
            new_password=str(body.get("newPassword") or ""),
        )
        return jsonify({"success": True, "message": "Senha alterada com sucesso"})
