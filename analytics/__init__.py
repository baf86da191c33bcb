"""
Quant Analytics Engine

Statistical analysis of pNode network metrics:
- Distribution helpers (normal, Student's t, incomplete beta, log-gamma)
- Correlation and linear regression with significance tests
- Volatility, drawdown, Sharpe-like ratio and consistency
- Trend analysis and forecasting
- Risk profiles, peer benchmarks and network-wide summaries
"""

__version__ = "0.1.0"
