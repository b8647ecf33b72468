# -*- coding: utf-8 -*-
"""
ESG Portal - Development server entry point
"""

import os

from esg_portal import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT') or 4000)
    print("=" * 60)
    print("ESG Portal API")
    print(f"Listening on http://127.0.0.1:{port}")
    print("=" * 60)

    app.run(debug=os.environ.get('FLASK_DEBUG') == '1', host='127.0.0.1', port=port)
