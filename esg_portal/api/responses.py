# -*- coding: utf-8 -*-
"""
ESG Portal API: /api/responses endpoints
=========================================
Yearly ESG questionnaires of the authenticated user.

Endpoints:
  POST   /api/responses                - create or update the record for a financial period
  GET    /api/responses                - all records, financial period ascending
  GET    /api/responses/summary        - chart series for the summary page
  GET    /api/responses/export/<fmt>   - xlsx / pdf / csv download
  GET    /api/responses/<period>       - one record
  DELETE /api/responses/<period>       - remove one record

Auth: Bearer token; every query is scoped to the token's user.
"""

import io

from flask import Blueprint, jsonify, request, send_file

from esg_portal.api.security import require_auth
from esg_portal.services.report_generator import report_generator_service
from esg_portal.services.submission_service import submission_service

responses_bp = Blueprint('responses', __name__)


@responses_bp.route('', methods=['POST'])
@require_auth
def save_response(ctx):
    """
    Request body (JSON):
    {
        "financialPeriod": "FY2024-25",
        "totalElectricityConsumption": 120000,
        "renewableElectricityConsumption": 30000,
        "carbonEmissions": 50,
        "totalEmployees": 100,
        "femaleEmployees": 30,
        "totalRevenue": 1000,
        ...
    }

    Response (200 OK): the stored record, including derived ratios
    """
    record = submission_service.submit(ctx.user_id, request.get_json(silent=True))
    return jsonify(record), 200


@responses_bp.route('', methods=['GET'])
@require_auth
def list_responses(ctx):
    return jsonify(submission_service.list(ctx.user_id)), 200


@responses_bp.route('/summary', methods=['GET'])
@require_auth
def summary(ctx):
    records = submission_service.list(ctx.user_id)
    return jsonify(report_generator_service.build_summary(records)), 200


@responses_bp.route('/export/<fmt>', methods=['GET'])
@require_auth
def export(ctx, fmt):
    records = submission_service.list(ctx.user_id)
    content, filename, mimetype = report_generator_service.export_records(records, fmt)
    return send_file(
        io.BytesIO(content),
        mimetype=mimetype,
        as_attachment=True,
        download_name=filename,
    )


@responses_bp.route('/<period>', methods=['GET'])
@require_auth
def get_response(ctx, period):
    return jsonify(submission_service.get_one(ctx.user_id, period)), 200


@responses_bp.route('/<period>', methods=['DELETE'])
@require_auth
def delete_response(ctx, period):
    submission_service.delete(ctx.user_id, period)
    return jsonify({
        'ok': True,
        'message': f'ESG data for {period.strip()} deleted successfully',
    }), 200
