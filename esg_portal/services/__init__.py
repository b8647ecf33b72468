# -*- coding: utf-8 -*-
"""
ESG Portal - Services
"""
