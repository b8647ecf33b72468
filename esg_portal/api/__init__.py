# -*- coding: utf-8 -*-
"""
ESG Portal - HTTP API blueprints
"""
