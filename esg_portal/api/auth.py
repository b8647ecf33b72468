# -*- coding: utf-8 -*-
"""
ESG Portal API: /api/auth endpoints

  POST /api/auth/register - {name, email, password} -> {token, user}
  POST /api/auth/login    - {email, password} -> {token, user}
  POST /api/auth/logout   - stateless; the client drops its token
  GET  /api/auth/me       - current user
"""

from flask import Blueprint, jsonify, request

from esg_portal.api.security import require_auth
from esg_portal.services.auth_service import auth_service

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    token, user = auth_service.register(request.get_json(silent=True))
    return jsonify({'token': token, 'user': user}), 200


@auth_bp.route('/login', methods=['POST'])
def login():
    token, user = auth_service.login(request.get_json(silent=True))
    return jsonify({'token': token, 'user': user}), 200


@auth_bp.route('/logout', methods=['POST'])
def logout():
    return jsonify({'ok': True}), 200


@auth_bp.route('/me', methods=['GET'])
@require_auth
def me(ctx):
    return jsonify({'user': auth_service.get_user(ctx.user_id)}), 200
