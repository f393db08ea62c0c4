# -*- coding: utf-8 -*-
"""Nutrition domain (goals, weekly aggregation, scoring).

Pure calculation modules (`bmr`, `macros`, `score`, `weekly`, `goals`,
`dashboard`) carry no I/O; `api` wires them to profiles and food logs.
"""
