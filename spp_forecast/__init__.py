"""
SPP Forecast

Seasonal forecast of ERCOT 15-minute settlement point prices, with the
statistics and backtest shown next to the forecast.
"""
