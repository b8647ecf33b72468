# -*- coding: utf-8 -*-
"""
ESG Portal - Service routes
"""

from datetime import datetime

from flask import Blueprint, jsonify

from config import APP_CONFIG

api_bp = Blueprint('api', __name__)


@api_bp.route('/health', methods=['GET'])
def health():
    """Liveness probe"""
    return jsonify({
        'status': 'ok',
        'version': APP_CONFIG['VERSION'],
        'timestamp': datetime.now().isoformat(),
    })
