"""Process-wide constants for PMM curve arithmetic.

All fixed-point values are integers scaled by 10^18 (WAD).
"""

# Number of decimal places carried by FixedDecimal
SCALE = 18

# Identity (1.0) in fixed-point
WAD = 10**SCALE

# 0.5 in fixed-point, used for round-half-up conversions
HALF_WAD = WAD // 2

# 1% in fixed-point
PERCENT_SCALER = 10**16

# Width limits of the integer domain
UINT256_MAX = 2**256 - 1
UINT128_MAX = 2**128 - 1

# Persisted decimals are little-endian u128
DECIMAL_BYTES = 16
