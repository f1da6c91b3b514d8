"""
Command-line entry points for the predictor.

Provides command-line interfaces for:
- Data download (Yahoo Finance -> data/tickers/)
- Close prediction (backtest or live open)
"""
