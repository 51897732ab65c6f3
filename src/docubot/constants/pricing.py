"""Runtime pricing used by the cost calculator.

Adobe I/O Runtime list prices. The free tier is applied per month, so daily
execution counts are scaled by DAYS_PER_MONTH before billing.
"""

PRICE_PER_GB_SECOND = 0.00001667
PRICE_PER_EXECUTION = 0.0000002
FREE_GB_SECONDS = 400_000
FREE_EXECUTIONS = 1_000_000

DAYS_PER_MONTH = 30
MB_PER_GB = 1024

PRICING_URL = "https://developer.adobe.com/app-builder/docs/overview/"
