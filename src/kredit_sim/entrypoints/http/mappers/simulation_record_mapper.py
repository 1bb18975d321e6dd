from __future__ import annotations

from kredit_sim.domain.simulation_record import BorrowerInfo, SimulationRecord, SimulationStatus
from kredit_sim.entrypoints.http.dtos.simulation_record import (
    BorrowerDTO,
    SaveSimulationRequestDTO,
    SimulationListResponseDTO,
    SimulationRecordDTO,
)
from kredit_sim.entrypoints.http.mappers.simulation_mapper import SimulationMapper
from kredit_sim.ports.simulation_repository import SimulationPage
from kredit_sim.use_cases.save_simulation import SaveSimulationRequest


class SimulationRecordMapper:
    """Maps between REST DTOs and saved-simulation domain models."""

    @staticmethod
    def to_save_request(dto: SaveSimulationRequestDTO) -> SaveSimulationRequest:
        return SaveSimulationRequest(
            borrower=BorrowerInfo(
                borrower_name=dto.borrower.borrower_name.strip(),
                co_borrower_name=dto.borrower.co_borrower_name,
                sales_name=dto.borrower.sales_name,
                unit_name=dto.borrower.unit_name,
                plate_number=dto.borrower.plate_number,
            ),
            input=SimulationMapper.to_domain_input(dto.simulation, field_prefix="simulation."),
            status=SimulationStatus(dto.status),
        )

    @staticmethod
    def to_response(record: SimulationRecord) -> SimulationRecordDTO:
        if record.id is None:
            raise ValueError("Cannot map a simulation record that has not been saved")

        borrower = record.borrower
        return SimulationRecordDTO(
            id=record.id,
            status=record.status.value,
            created_at=record.created_at,
            borrower=BorrowerDTO(
                borrower_name=borrower.borrower_name,
                co_borrower_name=borrower.co_borrower_name,
                sales_name=borrower.sales_name,
                unit_name=borrower.unit_name,
                plate_number=borrower.plate_number,
            ),
            simulation=SimulationMapper.to_input_dto(record.input),
            result=SimulationMapper.to_response(record.result),
        )

    @staticmethod
    def to_list_response(page: SimulationPage, offset: int, limit: int) -> SimulationListResponseDTO:
        return SimulationListResponseDTO(
            simulations=[SimulationRecordMapper.to_response(record) for record in page.records],
            total=page.total_count,
            offset=offset,
            limit=limit,
        )
