from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


SAMPLE_REPORT = """【每日收益快照】2025-01-31 (UTC+0)
- 总资产: 12,345.67 USDT
- 总投资: 10,000.00 USDT
- 已实现收益: 1,234.56
- 已实现收益率: 12.35%
- 年化收益率(已实现): 45.6%
- 更新时间: 2025-01-31 00:00:00

币种表现
BTCUSDT size=0.0123 avg=42000.5 price=43000.1 浮盈 12.30 (2.38%) value=528.90
ETHUSDT size=0.5 avg=2300 price=2250 浮盈 -25.00 (-2.17%) value=1125.00
Simple Earn USDT total=1,234.50

当日操作
- 2025-01-30 08:15 BTCUSDT 买入 0.001@42500.5 成交额 42.50
- 2025-01-30 12:40 ETHUSDT 卖出 0.1@2310.2 成交额 231.02 利润 3.45
- 无其他操作

字段说明
size: 持仓数量
avg: 持仓均价

口径：现货价折算，
仅作记录展示。

免责声明：不构成投资建议。
"""


@pytest.fixture()
def sample_report() -> str:
    return SAMPLE_REPORT


@pytest.fixture()
def sample_history() -> dict:
    return {
        "entries": [
            {"date": "2025-01-29", "nav": 1.02},
            {"date": "2025-01-28", "nav": "1.00"},
            {"date": "2025-01-30", "nav": 1.05},
            {"date": "2025-01-31", "nav": 1.04},
            {"date": "2025-02-01", "nav": 9.99},
        ]
    }
