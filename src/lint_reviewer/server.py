"""
Lint Reviewer HTTP Server

Flask app exposing pull request and single-file lint reviews.
"""

import logging
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from pydantic import ValidationError

from . import __version__
from .api import LintReviewerAPI, ReviewRequest
from .models.owner import FileLintRequest, PullRequestLintRequest
from .models.review import FileReviewResponse


logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def validation_errors(error: ValidationError):
    return [{'loc': [str(part) for part in e['loc']], 'msg': e['msg']} for e in error.errors()]


def create_app(reviewer_api: Optional[LintReviewerAPI] = None) -> Flask:
    """
    Create the Flask app.

    Args:
        reviewer_api: API used to run reviews; built from the environment when omitted

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)
    CORS(app)

    api = reviewer_api or LintReviewerAPI()

    @app.route('/api/v1/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'service': 'lint-reviewer',
            'version': __version__
        })

    @app.route('/api/v1/reviews/lint', methods=['POST'])
    def lint_pull_request():
        """Lint every changed file of a pull request."""
        try:
            payload = PullRequestLintRequest(**json_body())
        except ValidationError as e:
            return jsonify({'error': validation_errors(e), 'status': 'invalid'}), 400

        run = api.review_pull_request(ReviewRequest(
            repository=payload.repository,
            pr_number=payload.pr_number,
            owner=payload.owner.to_owner(),
        ))

        if run.status != 'completed':
            return jsonify({
                'review_id': run.review_id,
                'error': run.metadata.get('error'),
                'status': run.status
            }), 500

        return jsonify({
            'review_id': run.review_id,
            'status': run.status,
            'repository': run.repository,
            'pr_number': run.pr_number,
            'total_violations': run.violation_count,
            'processing_time': run.processing_time,
            'file_reviews': [r.model_dump(mode='json') for r in run.to_response()]
        })

    @app.route('/api/v1/files/lint', methods=['POST'])
    def lint_file():
        """Lint a single changed file."""
        try:
            payload = FileLintRequest(**json_body())
            build = payload.to_build()
            changed_file = payload.file.to_changed_file()
        except (ValidationError, ValueError) as e:
            errors = validation_errors(e) if isinstance(e, ValidationError) else str(e)
            return jsonify({'error': errors, 'status': 'invalid'}), 400

        try:
            reviews = api.review_changed_file(build, changed_file)
        except Exception as e:
            logger.error(f"File lint failed: {changed_file.filename} - {e}")
            return jsonify({'error': str(e), 'status': 'failed'}), 500

        return jsonify({
            'status': 'completed',
            'file_reviews': [FileReviewResponse.from_file_review(r).model_dump(mode='json') for r in reviews]
        })

    return app
