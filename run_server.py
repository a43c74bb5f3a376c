#!/usr/bin/env python3
"""
Lint Reviewer Server

Runs the Flask app serving lint reviews.
"""

import os

from lint_reviewer.config import get_config
from lint_reviewer.api import LintReviewerAPI
from lint_reviewer.server import create_app


config = get_config()
app = create_app(LintReviewerAPI(config))


if __name__ == '__main__':
    port = int(os.getenv('PORT', '8000'))

    print("Starting Lint Reviewer Server...")
    print(f"Server will be available at: http://localhost:{port}")
    print("API Documentation:")
    print("   - Health Check: GET /api/v1/health")
    print("   - Lint Pull Request: POST /api/v1/reviews/lint")
    print("   - Lint File: POST /api/v1/files/lint")

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug
    )
