# notetodo/auth/tokens.py
from flask import jsonify

from notetodo.common.errors import error_body
from notetodo.auth.service import load_identity

def _unauthenticated(message, code):
    return jsonify(error_body(message, code)), 401

def register_jwt_callbacks(jwt):
    """Chaque requête authentifiée relit l'utilisateur en base; tout échec donne un 401."""

    @jwt.user_lookup_loader
    def user_lookup_callback(jwt_header, jwt_data):
        return load_identity(jwt_data["sub"])

    @jwt.user_lookup_error_loader
    def user_lookup_error_callback(jwt_header, jwt_data):
        return _unauthenticated("User not found.", "user_not_found")

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return _unauthenticated("Token has expired.", "token_expired")

    @jwt.invalid_token_loader
    def invalid_token_callback(err_msg):
        return _unauthenticated("Invalid token.", "token_invalid")

    @jwt.unauthorized_loader
    def unauthorized_callback(err_msg):
        return _unauthenticated("Authentication required.", "authorization_required")
