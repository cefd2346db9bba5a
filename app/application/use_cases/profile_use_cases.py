"""
Profile use cases for the application layer.
Chef and business profiles are keyed by the owning user's id.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from app.application.use_cases.base_use_case import CommandUseCase, QueryUseCase, apply_changes
from app.application.dto.profile_dto import (
    CreateChefProfileRequestDTO, UpdateChefProfileRequestDTO, ChefProfileResponseDTO,
    CreateBusinessProfileRequestDTO, UpdateBusinessProfileRequestDTO, BusinessProfileResponseDTO,
    UpdatePaymentMethodRequestDTO, PaymentMethodResponseDTO
)
from app.domain.models.base import EntityNotFoundError, AuthorizationError
from app.domain.models.profile import ChefProfile, BusinessProfile, PaymentMethod


@dataclass
class UpdateChefProfileCommand:
    chef_id: str
    changes: UpdateChefProfileRequestDTO


@dataclass
class UpdateBusinessProfileCommand:
    business_id: str
    changes: UpdateBusinessProfileRequestDTO


@dataclass
class UpdatePaymentMethodCommand:
    chef_id: str
    changes: UpdatePaymentMethodRequestDTO


@dataclass
class SearchBusinessesQuery:
    name: Optional[str] = None
    location: Optional[str] = None
    limit: int = 50


class UpsertChefProfileUseCase(CommandUseCase[CreateChefProfileRequestDTO, Tuple[ChefProfileResponseDTO, bool]]):
    """
    Create the caller's chef profile, or replace its public fields.
    Returns the profile and whether it was created.
    """

    async def _execute_command_logic(
        self, request: CreateChefProfileRequestDTO
    ) -> Tuple[ChefProfileResponseDTO, bool]:
        user_id = self._require_user()
        profile = self.uow.chefs.get_by_id(user_id)
        created = profile is None
        if created:
            profile = ChefProfile(id=user_id, full_name=request.full_name, location=request.location)

        apply_changes(profile, request.model_dump(exclude_none=True))
        saved = self.uow.chefs.save(profile)
        return ChefProfileResponseDTO.from_domain(saved), created


class GetChefProfileUseCase(QueryUseCase[str, ChefProfileResponseDTO]):
    async def _execute_query(self, chef_id: str) -> ChefProfileResponseDTO:
        profile = self.uow.chefs.get_by_id(chef_id)
        if profile is None:
            raise EntityNotFoundError("Chef profile", chef_id)
        return ChefProfileResponseDTO.from_domain(profile)


class UpdateChefProfileUseCase(CommandUseCase[UpdateChefProfileCommand, ChefProfileResponseDTO]):
    """Partial update of a chef profile by its owner."""

    async def _execute_command_logic(self, request: UpdateChefProfileCommand) -> ChefProfileResponseDTO:
        if self._require_user() != request.chef_id:
            raise AuthorizationError("You can only update your own profile")

        profile = self.uow.chefs.get_by_id(request.chef_id)
        if profile is None:
            raise EntityNotFoundError("Chef profile", request.chef_id)

        apply_changes(profile, request.changes.changes())
        return ChefProfileResponseDTO.from_domain(self.uow.chefs.save(profile))


class UpdatePaymentMethodUseCase(CommandUseCase[UpdatePaymentMethodCommand, PaymentMethodResponseDTO]):
    """Choose stripe or bank transfer; bank needs sort code and account number."""

    async def _execute_command_logic(self, request: UpdatePaymentMethodCommand) -> PaymentMethodResponseDTO:
        if self._require_user() != request.chef_id:
            raise AuthorizationError("You can only update your own payment details")

        profile = self.uow.chefs.get_by_id(request.chef_id)
        if profile is None:
            raise EntityNotFoundError("Chef profile", request.chef_id)

        changes = request.changes
        profile.set_payment_method(
            PaymentMethod(changes.payment_method),
            sort_code=changes.sort_code,
            account_number=changes.account_number,
        )
        saved = self.uow.chefs.save(profile)
        return PaymentMethodResponseDTO(
            id=saved.id,
            payment_method=saved.payment_method,
            has_bank_details=saved.has_bank_details,
            updated_at=saved.updated_at,
        )


class UpsertBusinessProfileUseCase(
    CommandUseCase[CreateBusinessProfileRequestDTO, Tuple[BusinessProfileResponseDTO, bool]]
):
    """Create the caller's business profile, or replace its fields."""

    async def _execute_command_logic(
        self, request: CreateBusinessProfileRequestDTO
    ) -> Tuple[BusinessProfileResponseDTO, bool]:
        user_id = self._require_user()
        profile = self.uow.businesses.get_by_id(user_id)
        created = profile is None
        if created:
            profile = BusinessProfile(
                id=user_id, business_name=request.business_name, location=request.location
            )

        apply_changes(profile, request.model_dump(exclude_none=True))
        saved = self.uow.businesses.save(profile)
        return BusinessProfileResponseDTO.from_domain(saved), created


class GetBusinessProfileUseCase(QueryUseCase[str, BusinessProfileResponseDTO]):
    async def _execute_query(self, business_id: str) -> BusinessProfileResponseDTO:
        profile = self.uow.businesses.get_by_id(business_id)
        if profile is None:
            raise EntityNotFoundError("Business profile", business_id)
        return BusinessProfileResponseDTO.from_domain(profile)


class UpdateBusinessProfileUseCase(CommandUseCase[UpdateBusinessProfileCommand, BusinessProfileResponseDTO]):
    async def _execute_command_logic(self, request: UpdateBusinessProfileCommand) -> BusinessProfileResponseDTO:
        if self._require_user() != request.business_id:
            raise AuthorizationError("You can only update your own profile")

        profile = self.uow.businesses.get_by_id(request.business_id)
        if profile is None:
            raise EntityNotFoundError("Business profile", request.business_id)

        apply_changes(profile, request.changes.changes())
        return BusinessProfileResponseDTO.from_domain(self.uow.businesses.save(profile))


class SearchBusinessesUseCase(QueryUseCase[SearchBusinessesQuery, List[BusinessProfileResponseDTO]]):
    """Case-insensitive search on business name and location."""

    async def _execute_query(self, request: SearchBusinessesQuery) -> List[BusinessProfileResponseDTO]:
        profiles = self.uow.businesses.search(
            name=request.name, location=request.location, limit=request.limit
        )
        return [BusinessProfileResponseDTO.from_domain(p) for p in profiles]
