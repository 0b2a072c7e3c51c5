"""MeuPonto work-time accounting engine.

Calendar resolution, break tolerance, bridge-day distribution, punch
validation, daily summaries and the time bank ledger, with in-memory stores
and a thin Flask JSON adapter.
"""
