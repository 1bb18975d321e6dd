"""PostgreSQL implementation of SimulationRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from kredit_sim.domain.paging import Paging
from kredit_sim.domain.simulation import (
    CalculationResult,
    PaymentType,
    SimulationInput,
    SubCategory,
    VehicleCategory,
)
from kredit_sim.domain.simulation_record import BorrowerInfo, SimulationRecord, SimulationStatus
from kredit_sim.infra.db.models.simulation import SimulationRow
from kredit_sim.ports.simulation_repository import SimulationPage, SimulationRepository


class PostgresSimulationRepository(SimulationRepository):
    """
    PostgreSQL implementation of SimulationRepository.

    - One flat row per record (borrower, input and every result field)
    - Lists newest first by id
    - Returns total_count via COUNT(*) query
    - Converts SimulationRow (infrastructure) to SimulationRecord (domain)
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def add(self, record: SimulationRecord) -> SimulationRecord:
        row = self._to_row(record)
        self._session.add(row)
        # Flush to get the generated id and server defaults without committing
        self._session.flush()
        self._session.refresh(row)
        return self._to_domain(row)

    def get_by_id(self, simulation_id: int) -> SimulationRecord | None:
        row = self._session.get(SimulationRow, simulation_id)
        return self._to_domain(row) if row else None

    def list(self, paging: Paging) -> SimulationPage:
        # Trust that UseCase has validated inputs (contract programming)
        count_query = select(func.count()).select_from(SimulationRow)
        total_count = self._session.execute(count_query).scalar() or 0

        query = (
            select(SimulationRow)
            .order_by(SimulationRow.id.desc())
            .offset(paging.offset)
            .limit(paging.limit)
        )
        rows = self._session.execute(query).scalars().all()

        return SimulationPage(records=[self._to_domain(row) for row in rows], total_count=total_count)

    def update_status(
        self, simulation_id: int, status: SimulationStatus
    ) -> SimulationRecord | None:
        row = self._session.get(SimulationRow, simulation_id)
        if row is None:
            return None

        row.status = status.value
        self._session.flush()
        return self._to_domain(row)

    def _to_row(self, record: SimulationRecord) -> SimulationRow:
        borrower = record.borrower
        sim_input = record.input
        result = record.result

        return SimulationRow(
            borrower_name=borrower.borrower_name,
            co_borrower_name=borrower.co_borrower_name,
            sales_name=borrower.sales_name,
            unit_name=borrower.unit_name,
            plate_number=borrower.plate_number,
            status=record.status.value,
            category=sim_input.category.value,
            sub_category=sim_input.sub_category.value,
            is_loading_unit=sim_input.is_loading_unit,
            vehicle_price=sim_input.vehicle_price,
            requested_down_payment_percent=sim_input.down_payment_percent,
            tenor_months=sim_input.tenor_months,
            payment_type=sim_input.payment_type.value,
            insurance_label=result.insurance_label,
            star_level=result.star_level,
            interest_rate=result.interest_rate,
            insurance_rate=result.insurance_rate,
            down_payment_percent=result.down_payment_percent,
            down_payment_amount=result.down_payment_amount,
            pure_loan_principal=result.pure_loan_principal,
            insurance_amount=result.insurance_amount,
            policy_fee=result.policy_fee,
            total_financed_amount=result.total_financed_amount,
            total_interest=result.total_interest,
            total_loan_amount=result.total_loan_amount,
            installment_divisor=result.installment_divisor,
            monthly_installment=result.monthly_installment,
            admin_fee=result.admin_fee,
            policy_fee_at_first_payment=result.policy_fee_at_first_payment,
            first_installment_due_now=result.first_installment_due_now,
            total_first_payment=result.total_first_payment,
            residual_asset_value=result.residual_asset_value,
            is_special_scenario=result.is_special_scenario,
            interest_rate_fallback=result.interest_rate_fallback,
        )

    def _to_domain(self, row: SimulationRow) -> SimulationRecord:
        category = VehicleCategory(row.category)
        payment_type = PaymentType(row.payment_type)

        return SimulationRecord(
            id=row.id,
            created_at=row.created_at,
            status=SimulationStatus(row.status),
            borrower=BorrowerInfo(
                borrower_name=row.borrower_name,
                co_borrower_name=row.co_borrower_name,
                sales_name=row.sales_name,
                unit_name=row.unit_name,
                plate_number=row.plate_number,
            ),
            input=SimulationInput(
                vehicle_price=row.vehicle_price,
                down_payment_percent=row.requested_down_payment_percent,
                tenor_months=row.tenor_months,
                category=category,
                payment_type=payment_type,
                sub_category=SubCategory(row.sub_category),
                is_loading_unit=row.is_loading_unit,
                admin_fee=row.admin_fee,
                insurance_label=row.insurance_label,
            ),
            result=CalculationResult(
                star_level=row.star_level,
                interest_rate=row.interest_rate,
                insurance_rate=row.insurance_rate,
                vehicle_price=row.vehicle_price,
                down_payment_amount=row.down_payment_amount,
                down_payment_percent=row.down_payment_percent,
                pure_loan_principal=row.pure_loan_principal,
                insurance_amount=row.insurance_amount,
                policy_fee=row.policy_fee,
                total_financed_amount=row.total_financed_amount,
                total_interest=row.total_interest,
                total_loan_amount=row.total_loan_amount,
                installment_divisor=row.installment_divisor,
                monthly_installment=row.monthly_installment,
                admin_fee=row.admin_fee,
                policy_fee_at_first_payment=row.policy_fee_at_first_payment,
                first_installment_due_now=row.first_installment_due_now,
                total_first_payment=row.total_first_payment,
                residual_asset_value=row.residual_asset_value,
                is_special_scenario=row.is_special_scenario,
                interest_rate_fallback=row.interest_rate_fallback,
                category=category,
                payment_type=payment_type,
                tenor_months=row.tenor_months,
                insurance_label=row.insurance_label,
            ),
        )
