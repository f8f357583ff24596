"""Monthly settlement between the two members of a household.

For each member's payment cycle:
1. Sum all incomes for that cycle
2. Subtract all fixed expenses for that cycle
3. Split the remaining balance 50/50
4. Adjust for shared expenses already paid by each member
5. Net both members' transfers into a single payment

All money is Decimal; halves are exact quotients and are never rounded.
The engine reads its ledgers once when loaded and never writes.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import date
from decimal import Decimal
from functools import cached_property
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence

from sqlalchemy.orm import Session

from household.models.line_item import LineItem, LineItemKind, PaymentCycle
from household.models.member import Member
from household.models.shared_expense import SharedExpense
from household.services.line_item_service import LineItemService
from household.services.locale_service import format_period_name
from household.services.member_service import MemberService
from household.services.period_service import beginning_of_month
from household.services.shared_expense_service import SharedExpenseService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
TWO = Decimal("2")

SETTLEMENT_CYCLES = (PaymentCycle.CYCLE_1, PaymentCycle.CYCLE_2)


@dataclass(frozen=True)
class CycleSettlement:
    """Incomes, expenses and 50/50 split of one payment cycle."""

    incomes: Decimal
    expenses: Decimal
    balance: Decimal
    half_balance: Decimal


@dataclass(frozen=True)
class MemberSettlement:
    """Settlement of the member assigned to a payment cycle."""

    member_id: int
    member_name: str
    cycle: PaymentCycle
    incomes: Decimal
    fixed_expenses: Decimal
    cycle_balance: Decimal
    half_balance: Decimal
    shared_expenses_paid: Decimal
    shared_reimbursement: Decimal
    transfer_to_other: Decimal
    libre: Decimal


@dataclass(frozen=True)
class Transfer:
    """Net payment between the members; both sides are None when nothing moves."""

    from_member_id: int | None = None
    from_name: str | None = None
    to_member_id: int | None = None
    to_name: str | None = None
    amount: Decimal = ZERO


@dataclass(frozen=True)
class MemberRef:
    id: int
    name: str
    code: str


@dataclass(frozen=True)
class SettlementTotals:
    incomes: Decimal
    fixed_expenses: Decimal
    shared_expenses: Decimal
    all_expenses: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class SettlementSummary:
    """Read-only snapshot of a household month; recomputed on every request."""

    period: date
    period_name: str
    members: tuple[MemberRef, ...]
    totals: SettlementTotals
    incomes_by_category: Mapping[str, Decimal]
    expenses_by_category: Mapping[str, Decimal]
    by_cycle: Mapping[PaymentCycle, CycleSettlement]
    member_settlements: Mapping[int, MemberSettlement]
    transfer: Transfer
    libre_each: Mapping[int, Decimal] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form with enum keys and values replaced by their strings."""
        return {
            "period": self.period,
            "period_name": self.period_name,
            "members": [asdict(member) for member in self.members],
            "totals": asdict(self.totals),
            "by_category": {
                "incomes": dict(self.incomes_by_category),
                "expenses": dict(self.expenses_by_category),
            },
            "by_cycle": {cycle.value: asdict(data) for cycle, data in self.by_cycle.items()},
            "member_settlements": {
                member_id: {**asdict(settlement), "cycle": settlement.cycle.value}
                for member_id, settlement in self.member_settlements.items()
            },
            "transfer": asdict(self.transfer),
            "libre_each": dict(self.libre_each),
        }


def assign_cycles(members: Iterable[Member]) -> dict[PaymentCycle, Member]:
    """Default cycle assignment by directory position.

    The member with the lowest position settles ``cycle_1`` and the next one
    ``cycle_2``. Further members stay out of the settlement.
    """
    ordered = sorted(members, key=lambda m: (m.position or 0, m.id or 0))
    return dict(zip(SETTLEMENT_CYCLES, ordered))


def _sum_amounts(records: Iterable[LineItem | SharedExpense]) -> Decimal:
    return sum((Decimal(record.amount) for record in records), ZERO)


class MonthlySettlement:
    """Settlement engine for one household month.

    Works on a fixed snapshot of members, line items and shared expenses.
    Every figure is computed on first access and cached for the life of the
    instance; build a new instance to see later ledger changes.

    Args:
        period_date: Any date within the target month
        members: Household members ordered by position
        line_items: Line items of the target month
        shared_expenses: Shared expenses of the target month
        cycle_members: Explicit cycle to member assignment; defaults to
            ``assign_cycles(members)``
    """

    def __init__(
        self,
        period_date: date,
        members: Sequence[Member],
        line_items: Sequence[LineItem],
        shared_expenses: Sequence[SharedExpense],
        cycle_members: Mapping[PaymentCycle, Member] | None = None,
    ):
        self.period_date = beginning_of_month(period_date)
        self.members = list(members)

        # Period isolation also holds for snapshots built by hand
        self.line_items = [
            i for i in line_items if beginning_of_month(i.period_date) == self.period_date
        ]
        self.shared_expenses = [e for e in shared_expenses if e.period_date == self.period_date]

        if cycle_members is None:
            cycle_members = assign_cycles(self.members)
        else:
            cycle_members = {PaymentCycle(cycle): m for cycle, m in cycle_members.items()}
            invalid = set(cycle_members) - set(SETTLEMENT_CYCLES)
            if invalid:
                raise ValueError(
                    f"Only {', '.join(c.value for c in SETTLEMENT_CYCLES)} can be assigned "
                    f"to members, got {', '.join(sorted(c.value for c in invalid))}"
                )
            assigned = [m.id for m in cycle_members.values()]
            if len(set(assigned)) != len(assigned):
                raise ValueError(f"Member {assigned[0]} cannot settle both cycles")
        self.cycle_members: Mapping[PaymentCycle, Member] = MappingProxyType(dict(cycle_members))

        self._cycle_cache: dict[PaymentCycle, CycleSettlement] = {}

    @classmethod
    def load(
        cls,
        db: Session,
        household_id: int,
        period_date: date,
        cycle_members: Mapping[PaymentCycle, Member] | None = None,
    ) -> "MonthlySettlement":
        """Load a household month from the ledgers (one read per ledger)."""
        period = beginning_of_month(period_date)
        members = MemberService(db).ordered_members(household_id)
        line_items = LineItemService(db).items_for_period(household_id, period)
        shared_expenses = SharedExpenseService(db).shared_expenses_for_period(household_id, period)

        logger.debug(
            "Loaded settlement snapshot: household_id=%d period=%s members=%d items=%d expenses=%d",
            household_id,
            period,
            len(members),
            len(line_items),
            len(shared_expenses),
        )
        return cls(period, members, line_items, shared_expenses, cycle_members=cycle_members)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    @cached_property
    def incomes(self) -> list[LineItem]:
        return [i for i in self.line_items if LineItemKind(i.kind) == LineItemKind.INCOME]

    @cached_property
    def expenses(self) -> list[LineItem]:
        return [i for i in self.line_items if LineItemKind(i.kind) == LineItemKind.EXPENSE]

    @cached_property
    def shared_only(self) -> list[SharedExpense]:
        return [e for e in self.shared_expenses if e.shared]

    @cached_property
    def total_incomes(self) -> Decimal:
        """Incomes of the month across all cycles."""
        return _sum_amounts(self.incomes)

    @cached_property
    def total_fixed_expenses(self) -> Decimal:
        """Line item expenses of the month across all cycles."""
        return _sum_amounts(self.expenses)

    @cached_property
    def total_shared_expenses(self) -> Decimal:
        """Expenses flagged as shared; private ones never count."""
        return _sum_amounts(self.shared_only)

    @property
    def total_all_expenses(self) -> Decimal:
        return self.total_fixed_expenses + self.total_shared_expenses

    @property
    def net_balance(self) -> Decimal:
        return self.total_incomes - self.total_all_expenses

    @cached_property
    def incomes_by_category(self) -> dict[str, Decimal]:
        return self._group_by_category(self.incomes)

    @cached_property
    def expenses_by_category(self) -> dict[str, Decimal]:
        return self._group_by_category(self.expenses)

    @cached_property
    def items_by_cycle(self) -> dict[PaymentCycle, list[LineItem]]:
        """Line items per cycle ordered by category and description; every cycle present."""
        grouped: dict[PaymentCycle, list[LineItem]] = {cycle: [] for cycle in PaymentCycle}
        for item in self.line_items:
            grouped[PaymentCycle(item.payment_cycle)].append(item)
        for items in grouped.values():
            items.sort(key=lambda i: (i.category, i.description))
        return grouped

    @staticmethod
    def _group_by_category(items: Iterable[LineItem]) -> dict[str, Decimal]:
        totals: dict[str, Decimal] = {}
        for item in items:
            key = str(item.category)
            totals[key] = totals.get(key, ZERO) + Decimal(item.amount)
        return dict(sorted(totals.items()))

    # ------------------------------------------------------------------
    # Cycle and member settlements
    # ------------------------------------------------------------------

    def cycle_settlement(self, cycle: PaymentCycle | str) -> CycleSettlement:
        """Incomes minus expenses of one cycle, and half of it."""
        cycle = PaymentCycle(cycle)
        if cycle not in self._cycle_cache:
            items = self.items_by_cycle[cycle]
            cycle_incomes = _sum_amounts(
                i for i in items if LineItemKind(i.kind) == LineItemKind.INCOME
            )
            cycle_expenses = _sum_amounts(
                i for i in items if LineItemKind(i.kind) == LineItemKind.EXPENSE
            )
            balance = cycle_incomes - cycle_expenses
            self._cycle_cache[cycle] = CycleSettlement(
                incomes=cycle_incomes,
                expenses=cycle_expenses,
                balance=balance,
                half_balance=balance / TWO,
            )
        return self._cycle_cache[cycle]

    def member_shared_total(self, member: Member) -> Decimal:
        """Shared expenses this member paid in the period."""
        return _sum_amounts(e for e in self.shared_only if e.member_id == member.id)

    def calculate_member_settlement(
        self, member: Member, cycle: PaymentCycle | str
    ) -> MemberSettlement:
        """Settle ``member`` against the balance of ``cycle``.

        The member owes the other half of the cycle balance, minus half of
        the shared expenses they already paid in full.
        """
        cycle = PaymentCycle(cycle)
        cycle_data = self.cycle_settlement(cycle)
        member_shared = self.member_shared_total(member)

        # Half of what this member fronted is owed back by the other member
        shared_reimbursement = member_shared / TWO
        transfer_to_other = cycle_data.half_balance - shared_reimbursement

        # Not net of the reimbursement; matches the cycle's half balance
        libre = cycle_data.half_balance

        return MemberSettlement(
            member_id=member.id,
            member_name=member.name,
            cycle=cycle,
            incomes=cycle_data.incomes,
            fixed_expenses=cycle_data.expenses,
            cycle_balance=cycle_data.balance,
            half_balance=cycle_data.half_balance,
            shared_expenses_paid=member_shared,
            shared_reimbursement=shared_reimbursement,
            transfer_to_other=transfer_to_other,
            libre=libre,
        )

    @cached_property
    def member_1_settlement(self) -> MemberSettlement | None:
        """Settlement of the cycle 1 member, or None when nobody is assigned."""
        member = self.cycle_members.get(PaymentCycle.CYCLE_1)
        if member is None:
            return None
        return self.calculate_member_settlement(member, PaymentCycle.CYCLE_1)

    @cached_property
    def member_2_settlement(self) -> MemberSettlement | None:
        """Settlement of the cycle 2 member, or None when nobody is assigned."""
        member = self.cycle_members.get(PaymentCycle.CYCLE_2)
        if member is None:
            return None
        return self.calculate_member_settlement(member, PaymentCycle.CYCLE_2)

    @property
    def has_both_members(self) -> bool:
        return self.member_1_settlement is not None and self.member_2_settlement is not None

    # ------------------------------------------------------------------
    # Transfer
    # ------------------------------------------------------------------

    @cached_property
    def net_transfer(self) -> Decimal:
        """Positive: member 1 owes member 2. Negative: member 2 owes member 1."""
        if not self.has_both_members:
            return ZERO
        return (
            self.member_1_settlement.transfer_to_other
            - self.member_2_settlement.transfer_to_other
        )

    @cached_property
    def transfer(self) -> Transfer:
        net = self.net_transfer
        if not self.has_both_members or net == 0:
            return Transfer()

        member_1 = self.cycle_members[PaymentCycle.CYCLE_1]
        member_2 = self.cycle_members[PaymentCycle.CYCLE_2]
        payer, payee = (member_1, member_2) if net > 0 else (member_2, member_1)
        return Transfer(
            from_member_id=payer.id,
            from_name=payer.name,
            to_member_id=payee.id,
            to_name=payee.name,
            amount=abs(net),
        )

    @cached_property
    def libre_each(self) -> dict[int, Decimal]:
        """Free money per member; empty unless both cycles have a member."""
        if not self.has_both_members:
            return {}
        return {
            self.member_1_settlement.member_id: self.member_1_settlement.libre,
            self.member_2_settlement.member_id: self.member_2_settlement.libre,
        }

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    @cached_property
    def member_settlements(self) -> dict[int, MemberSettlement]:
        settlements = (self.member_1_settlement, self.member_2_settlement)
        return {s.member_id: s for s in settlements if s is not None}

    @cached_property
    def summary(self) -> SettlementSummary:
        participants = [self.cycle_members[c] for c in SETTLEMENT_CYCLES if c in self.cycle_members]
        summary = SettlementSummary(
            period=self.period_date,
            period_name=format_period_name(self.period_date),
            members=tuple(MemberRef(id=m.id, name=m.name, code=m.code) for m in participants),
            totals=SettlementTotals(
                incomes=self.total_incomes,
                fixed_expenses=self.total_fixed_expenses,
                shared_expenses=self.total_shared_expenses,
                all_expenses=self.total_all_expenses,
                net_balance=self.net_balance,
            ),
            incomes_by_category=MappingProxyType(self.incomes_by_category),
            expenses_by_category=MappingProxyType(self.expenses_by_category),
            by_cycle=MappingProxyType({c: self.cycle_settlement(c) for c in PaymentCycle}),
            member_settlements=MappingProxyType(self.member_settlements),
            transfer=self.transfer,
            libre_each=MappingProxyType(self.libre_each),
        )
        logger.debug(
            "Settlement for %s: net_transfer=%s from=%s to=%s",
            self.period_date,
            self.net_transfer,
            summary.transfer.from_member_id,
            summary.transfer.to_member_id,
        )
        return summary


__all__ = [
    "MonthlySettlement",
    "CycleSettlement",
    "MemberSettlement",
    "Transfer",
    "MemberRef",
    "SettlementTotals",
    "SettlementSummary",
    "assign_cycles",
]
