"""
Stateless reporting: alert texts and aggregations over loaded rows.
"""
