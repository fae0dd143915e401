"""Mock bank SMS generator for demos and simulated traffic.

Produces the message formats seen from Indian banks (UPI, NEFT, IMPS, ATM,
salary credit, POS). About one in five messages is built to look suspicious
so the fraud rules have something to catch.
"""

import random
from datetime import datetime

from fintrack.core.clock import Clock, local_now

MERCHANTS = ["Swiggy", "Amazon", "Zomato", "Flipkart", "SIP Investment", "Myntra", "BigBasket", "Spotify"]
PEOPLE = ["Rahul Sharma", "Priya Singh", "Amit Kumar", "Neha Gupta", "Vikram Patel"]
EMPLOYERS = ["TCS", "Infosys", "Wipro", "HCL Tech", "ABC Corp"]
BANKS = ["SBI", "HDFC", "ICICI", "Axis", "Kotak"]

SUSPICIOUS_RATE = 0.2


class MockSmsGenerator:
    """Generate one raw SMS string per call.

    Args:
        rng: Source of randomness; pass a seeded Random for repeatable output
        clock: Supplies the date printed in the message
    """

    def __init__(self, rng: random.Random | None = None, clock: Clock | None = None):
        self.rng = rng or random.Random()
        self.clock = clock or local_now

    def generate(self) -> str:
        date_str = self._format_date(self.clock())
        ref_no = self.rng.randrange(1_000_000)
        bank = self.rng.choice(BANKS)

        if self.rng.random() < SUSPICIOUS_RATE:
            return self._suspicious(bank, date_str, ref_no)
        return self._normal(bank, date_str, ref_no)

    def _suspicious(self, bank: str, date_str: str, ref_no: int) -> str:
        scenario = self.rng.randrange(4)
        if scenario == 0:
            # High amount to an unknown company
            amount = self.rng.randrange(15000, 65000)
            return (
                f"Rs {amount} debited from your {bank} account via UPI to XYZ Pvt Ltd "
                f"on {date_str}. Ref No {ref_no}"
            )
        if scenario == 1:
            amount = self.rng.randrange(20000, 100000)
            return f"Rs {amount} sent to Unknown Trader via NEFT on {date_str}. Ref No {ref_no}"
        if scenario == 2:
            amount = self.rng.randrange(10000, 40000)
            return f"Rs {amount} withdrawn at {bank} ATM on {date_str}. Ref No {ref_no}"
        # Rapid small charges to an unknown merchant
        amount = self.rng.randrange(50, 550)
        return (
            f"Rs {amount} debited from your {bank} account via UPI to Quick Pay Global "
            f"on {date_str}. Ref No {ref_no}"
        )

    def _normal(self, bank: str, date_str: str, ref_no: int) -> str:
        fmt = self.rng.randrange(6)
        amount = self.rng.randrange(100, 5100)

        if fmt == 0:
            return (
                f"Rs {amount} debited from your {bank} account via UPI to "
                f"{self.rng.choice(MERCHANTS)} on {date_str}. Ref No {ref_no}"
            )
        if fmt == 1:
            channel = self.rng.choice(["NEFT", "IMPS"])
            return (
                f"Rs {amount} sent to {self.rng.choice(PEOPLE)} via {channel} "
                f"on {date_str}. Ref No {ref_no}"
            )
        if fmt == 2:
            salary = self.rng.randrange(20000, 70000)
            return (
                f"Rs {salary} credited from {self.rng.choice(EMPLOYERS)} via NEFT "
                f"on {date_str}. Ref No {ref_no}"
            )
        if fmt == 3:
            return (
                f"Rs {amount} received from {self.rng.choice(PEOPLE)} via UPI "
                f"on {date_str}. Ref No {ref_no}"
            )
        if fmt == 4:
            rounded = -(-amount // 100) * 100
            return f"Rs {rounded} withdrawn at {bank} ATM on {date_str}. Ref No {ref_no}"
        return (
            f"Rs {amount} debited from your {bank} account via POS at "
            f"{self.rng.choice(MERCHANTS)} on {date_str}. Ref No {ref_no}"
        )

    @staticmethod
    def _format_date(when: datetime) -> str:
        return when.strftime("%d %b %Y")
