"""GraphQL queries sent to the indexer."""

SNAPSHOT_FIELDS = """
        availableLiquidity
        timestamp
        blockNumber
        borrowRate
        eventType
        id
        lendingPool
        router
        supplyAPR
        totalBorrowAssets
        totalCollateral
        totalSupplyAssets
        utilization"""

# Snapshots for every pool plus the collateral event log, in one request.
AGGREGATED_HISTORY_QUERY = f"""
  query {{
    poolSnapshots {{
      items {{{SNAPSHOT_FIELDS}
      }}
    }}
    supplyCollateralEvents {{
      items {{
        amount
        lendingPool
        positionAddress
        timestamp
        user
      }}
    }}
    withdrawCollateralEvents {{
      items {{
        amount
        lendingPool
        timestamp
        user
      }}
    }}
  }}
"""

POOL_SNAPSHOTS_QUERY = f"""
  query {{
    poolSnapshots {{
      items {{{SNAPSHOT_FIELDS}
      }}
    }}
  }}
"""

_ACTIVITY_FIELDS = """
        id
        amount
        timestamp
        txHash
        user
        lendingPool"""

USER_ACTIVITY_QUERY = f"""
  query {{
    supplyLiquidityEvents {{
      items {{{_ACTIVITY_FIELDS}
        shares
      }}
    }}
    withdrawLiquidityEvents {{
      items {{{_ACTIVITY_FIELDS}
        shares
      }}
    }}
    borrowDebtEvents {{
      items {{{_ACTIVITY_FIELDS}
        userAmount
        shares
      }}
    }}
    repayByPositionEvents {{
      items {{{_ACTIVITY_FIELDS}
        shares
      }}
    }}
    supplyCollateralEvents {{
      items {{{_ACTIVITY_FIELDS}
      }}
    }}
    withdrawCollateralEvents {{
      items {{{_ACTIVITY_FIELDS}
      }}
    }}
  }}
"""

# Liquidity side of a pool; filtered to one lendingPool after the fetch.
POOL_TRANSACTIONS_QUERY = f"""
  query {{
    supplyLiquidityEvents {{
      items {{{_ACTIVITY_FIELDS}
        blockNumber
        shares
      }}
    }}
    withdrawLiquidityEvents {{
      items {{{_ACTIVITY_FIELDS}
        blockNumber
        shares
      }}
    }}
  }}
"""

BORROW_TRANSACTIONS_QUERY = f"""
  query {{
    borrowDebtEvents {{
      items {{{_ACTIVITY_FIELDS}
        blockNumber
        protocolFee
        shares
        userAmount
      }}
    }}
    repayByPositionEvents {{
      items {{{_ACTIVITY_FIELDS}
        blockNumber
        shares
      }}
    }}
    supplyCollateralEvents {{
      items {{{_ACTIVITY_FIELDS}
        blockNumber
        positionAddress
      }}
    }}
    withdrawCollateralEvents {{
      items {{{_ACTIVITY_FIELDS}
        blockNumber
      }}
    }}
  }}
"""
