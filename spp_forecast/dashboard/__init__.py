"""
Dashboard Package

Streamlit client of the forecast API: date picker, chart, summary cards and
interval table.
"""
