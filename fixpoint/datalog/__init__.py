"""
Datalog model and evaluation engine.
"""
