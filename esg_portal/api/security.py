# -*- coding: utf-8 -*-
"""
Bearer-token guard for blueprint views

The decoded identity is passed to the view as an explicit AuthContext
argument; nothing is stored in module or request globals.
"""

from functools import wraps

from flask import request

from esg_portal.services.auth_service import auth_service


def require_auth(view):
    """Resolve the Authorization header and call view(ctx, *args, **kwargs)"""

    @wraps(view)
    def wrapper(*args, **kwargs):
        ctx = auth_service.context_from_header(request.headers.get('Authorization', ''))
        return view(ctx, *args, **kwargs)

    return wrapper
