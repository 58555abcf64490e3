from functools import wraps
from flask import g
from flask_jwt_extended import verify_jwt_in_request, current_user, get_current_user
from notetodo.common.errors import Forbidden

def login_required(fn):
    """
    Vérifie le bearer token puis résout l'utilisateur depuis la base
    (user_lookup_loader): un compte supprimé perd l'accès immédiatement.
    """
    @wraps(fn)
    def inner(*args, **kwargs):
        verify_jwt_in_request()  # lève si absent / invalide / expiré / inconnu
        g.user_id = current_user.id
        return fn(*args, **kwargs)
    return inner

def admin_required(fn):
    """
    Ex: @admin_required
    Le flag admin est relu en base, pas depuis les claims du token.
    """
    @wraps(fn)
    @login_required
    def inner(*args, **kwargs):
        if not current_user.is_admin:
            raise Forbidden("Admin privileges required.")
        return fn(*args, **kwargs)
    return inner

def current_identity():
    return get_current_user()
