"""
Scheduling engine: data model, policies, timeline and step projection.
"""
