"""Unit tests for team, invitation and product use cases."""

import pytest

from tenantgate.application.dto.product_dto import ProductInput
from tenantgate.application.use_cases.product.manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from tenantgate.application.use_cases.team.create_team import CreateTeamUseCase
from tenantgate.application.use_cases.team.invite_member import InviteMemberUseCase
from tenantgate.application.use_cases.team.manage_members import (
    ChangeMemberRoleUseCase,
    RemoveMemberUseCase,
)
from tenantgate.application.use_cases.team.respond_to_invitation import (
    RespondToInvitationUseCase,
)
from tenantgate.domain.exceptions import (
    Conflict,
    InvalidTransition,
    LimitExceeded,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from tenantgate.domain.value_objects import InvitationStatus, ProductStatus, TeamRole

from tests.conftest import (
    ADMIN_ID,
    ENTERPRISE_PLAN_ID,
    FakeTeamMemberRepository,
    InMemoryStore,
    MEMBER_ID,
    OTHER_TEAM_ID,
    OUTSIDER_ID,
    OWNER_ID,
    TEAM_ID,
    VIEWER_ID,
    add_products,
    make_uow_factory,
)


# --- Teams ---


@pytest.mark.asyncio
async def test_create_team_makes_creator_owner(store: InMemoryStore, uow_factory) -> None:
    team = await CreateTeamUseCase(uow_factory).execute(MEMBER_ID, "  Acme  ")

    assert team.name == "Acme"
    assert team.owner_id == MEMBER_ID
    members = [m for m in store.members.values() if m.team_id == team.id]
    assert len(members) == 1
    assert members[0].user_id == MEMBER_ID
    assert members[0].role == TeamRole.OWNER


@pytest.mark.asyncio
async def test_create_team_requires_name(uow_factory) -> None:
    with pytest.raises(ValidationError):
        await CreateTeamUseCase(uow_factory).execute(MEMBER_ID, "  ")


@pytest.mark.asyncio
async def test_create_team_unknown_user(uow_factory) -> None:
    with pytest.raises(NotFound):
        await CreateTeamUseCase(uow_factory).execute("ghost", "Acme")


# --- Invitations ---


def _invite(uow_factory, team_access_resolver) -> InviteMemberUseCase:
    return InviteMemberUseCase(uow_factory, team_access_resolver)


@pytest.mark.asyncio
async def test_admin_invites_member(store, uow_factory, team_access_resolver) -> None:
    invitation = await _invite(uow_factory, team_access_resolver).execute(
        ADMIN_ID, TEAM_ID, "new@example.com", "ADMIN"
    )
    assert invitation.status == InvitationStatus.PENDING
    assert invitation.role == TeamRole.ADMIN
    assert store.invitations[invitation.id].invited_by == ADMIN_ID


@pytest.mark.asyncio
async def test_member_cannot_invite(uow_factory, team_access_resolver) -> None:
    with pytest.raises(PermissionDenied):
        await _invite(uow_factory, team_access_resolver).execute(
            MEMBER_ID, TEAM_ID, "new@example.com"
        )


@pytest.mark.asyncio
async def test_invitation_cannot_propose_owner(uow_factory, team_access_resolver) -> None:
    with pytest.raises(ValidationError):
        await _invite(uow_factory, team_access_resolver).execute(
            OWNER_ID, TEAM_ID, "new@example.com", TeamRole.OWNER
        )


@pytest.mark.asyncio
async def test_duplicate_pending_invitation(uow_factory, team_access_resolver) -> None:
    use_case = _invite(uow_factory, team_access_resolver)
    await use_case.execute(OWNER_ID, TEAM_ID, "new@example.com")
    with pytest.raises(Conflict):
        await use_case.execute(OWNER_ID, TEAM_ID, "NEW@example.com")


@pytest.mark.asyncio
async def test_inviting_existing_member(uow_factory, team_access_resolver) -> None:
    with pytest.raises(Conflict):
        await _invite(uow_factory, team_access_resolver).execute(
            OWNER_ID, TEAM_ID, f"{MEMBER_ID}@example.com"
        )


@pytest.mark.asyncio
async def test_accept_invitation_adds_member(store, uow_factory, team_access_resolver) -> None:
    invitation = await _invite(uow_factory, team_access_resolver).execute(
        OWNER_ID, TEAM_ID, f"{OUTSIDER_ID}@example.com", TeamRole.ADMIN
    )

    member = await RespondToInvitationUseCase(uow_factory).accept(OUTSIDER_ID, invitation.id)

    assert member.role == TeamRole.ADMIN
    assert store.invitations[invitation.id].status == InvitationStatus.ACCEPTED
    assert await team_access_resolver.user_role_in_team(OUTSIDER_ID, TEAM_ID) == TeamRole.ADMIN


@pytest.mark.asyncio
async def test_decline_invitation(store, uow_factory, team_access_resolver) -> None:
    invitation = await _invite(uow_factory, team_access_resolver).execute(
        OWNER_ID, TEAM_ID, f"{OUTSIDER_ID}@example.com"
    )

    await RespondToInvitationUseCase(uow_factory).decline(OUTSIDER_ID, invitation.id)

    assert store.invitations[invitation.id].status == InvitationStatus.DECLINED
    assert (TEAM_ID, OUTSIDER_ID) not in store.members


@pytest.mark.asyncio
@pytest.mark.parametrize("first", ["accept", "decline"])
@pytest.mark.parametrize("second", ["accept", "decline"])
async def test_terminal_invitation_cannot_change(
    store, uow_factory, team_access_resolver, first, second
) -> None:
    """ACCEPTED and DECLINED are final."""
    invitation = await _invite(uow_factory, team_access_resolver).execute(
        OWNER_ID, TEAM_ID, f"{OUTSIDER_ID}@example.com"
    )
    respond = RespondToInvitationUseCase(uow_factory)
    await getattr(respond, first)(OUTSIDER_ID, invitation.id)
    status = store.invitations[invitation.id].status

    with pytest.raises(InvalidTransition):
        await getattr(respond, second)(OUTSIDER_ID, invitation.id)

    assert store.invitations[invitation.id].status == status


@pytest.mark.asyncio
async def test_only_invitee_can_respond(uow_factory, team_access_resolver) -> None:
    invitation = await _invite(uow_factory, team_access_resolver).execute(
        OWNER_ID, TEAM_ID, f"{OUTSIDER_ID}@example.com"
    )
    with pytest.raises(PermissionDenied):
        await RespondToInvitationUseCase(uow_factory).accept(MEMBER_ID, invitation.id)


@pytest.mark.asyncio
async def test_failed_accept_leaves_invitation_pending(
    store, uow_factory, team_access_resolver, monkeypatch
) -> None:
    """Membership insert and status change happen together or not at all."""
    invitation = await _invite(uow_factory, team_access_resolver).execute(
        OWNER_ID, TEAM_ID, f"{OUTSIDER_ID}@example.com"
    )

    async def failing_add(self, member):
        raise RuntimeError("write failed")

    monkeypatch.setattr(FakeTeamMemberRepository, "add", failing_add)
    respond = RespondToInvitationUseCase(make_uow_factory(store))
    with pytest.raises(RuntimeError):
        await respond.accept(OUTSIDER_ID, invitation.id)

    assert store.invitations[invitation.id].status == InvitationStatus.PENDING
    assert (TEAM_ID, OUTSIDER_ID) not in store.members


@pytest.mark.asyncio
async def test_accept_unknown_invitation(uow_factory) -> None:
    with pytest.raises(NotFound):
        await RespondToInvitationUseCase(uow_factory).accept(OUTSIDER_ID, "missing")


# --- Member management ---


@pytest.mark.asyncio
async def test_admin_changes_member_role(store, uow_factory, team_access_resolver) -> None:
    await ChangeMemberRoleUseCase(uow_factory, team_access_resolver).execute(
        ADMIN_ID, TEAM_ID, MEMBER_ID, "ADMIN"
    )
    assert store.members[(TEAM_ID, MEMBER_ID)].role == TeamRole.ADMIN


@pytest.mark.asyncio
async def test_member_cannot_change_roles(uow_factory, team_access_resolver) -> None:
    with pytest.raises(PermissionDenied):
        await ChangeMemberRoleUseCase(uow_factory, team_access_resolver).execute(
            MEMBER_ID, TEAM_ID, VIEWER_ID, TeamRole.ADMIN
        )


@pytest.mark.asyncio
async def test_owner_role_cannot_be_changed(store, uow_factory, team_access_resolver) -> None:
    with pytest.raises(InvalidTransition):
        await ChangeMemberRoleUseCase(uow_factory, team_access_resolver).execute(
            ADMIN_ID, TEAM_ID, OWNER_ID, TeamRole.MEMBER
        )
    assert store.members[(TEAM_ID, OWNER_ID)].role == TeamRole.OWNER


@pytest.mark.asyncio
async def test_role_change_cannot_grant_ownership(uow_factory, team_access_resolver) -> None:
    with pytest.raises(ValidationError):
        await ChangeMemberRoleUseCase(uow_factory, team_access_resolver).execute(
            OWNER_ID, TEAM_ID, MEMBER_ID, TeamRole.OWNER
        )


@pytest.mark.asyncio
async def test_owner_removes_member(store, uow_factory, team_access_resolver) -> None:
    await RemoveMemberUseCase(uow_factory, team_access_resolver).execute(OWNER_ID, TEAM_ID, MEMBER_ID)
    assert (TEAM_ID, MEMBER_ID) not in store.members


@pytest.mark.asyncio
async def test_admin_cannot_remove_members(store, uow_factory, team_access_resolver) -> None:
    with pytest.raises(PermissionDenied):
        await RemoveMemberUseCase(uow_factory, team_access_resolver).execute(
            ADMIN_ID, TEAM_ID, MEMBER_ID
        )
    assert (TEAM_ID, MEMBER_ID) in store.members


@pytest.mark.asyncio
async def test_owner_cannot_be_removed(store, uow_factory, team_access_resolver) -> None:
    """Not even by the owner."""
    with pytest.raises(InvalidTransition):
        await RemoveMemberUseCase(uow_factory, team_access_resolver).execute(
            OWNER_ID, TEAM_ID, OWNER_ID
        )
    assert store.members[(TEAM_ID, OWNER_ID)].role == TeamRole.OWNER


@pytest.mark.asyncio
async def test_owner_guard_lives_in_repository(store, uow_factory) -> None:
    async with uow_factory() as uow:
        with pytest.raises(InvalidTransition):
            await uow.team_members.remove(TEAM_ID, OWNER_ID)
        with pytest.raises(InvalidTransition):
            await uow.team_members.update_role(TEAM_ID, OWNER_ID, TeamRole.ADMIN)
    assert store.members[(TEAM_ID, OWNER_ID)].role == TeamRole.OWNER


@pytest.mark.asyncio
async def test_remove_unknown_member(uow_factory, team_access_resolver) -> None:
    with pytest.raises(NotFound):
        await RemoveMemberUseCase(uow_factory, team_access_resolver).execute(
            OWNER_ID, TEAM_ID, OUTSIDER_ID
        )


# --- Products ---


@pytest.fixture
def product_deps(uow_factory, permission_checker, team_access_resolver):
    return uow_factory, permission_checker, team_access_resolver


@pytest.mark.asyncio
async def test_create_product(store, product_deps, entitlement_checker) -> None:
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)

    product = await use_case.execute(MEMBER_ID, TEAM_ID, ProductInput(name="Widget"))

    assert store.products[product.id].team_id == TEAM_ID
    assert product.status == ProductStatus.ACTIVE
    assert product.created_by == MEMBER_ID


@pytest.mark.asyncio
async def test_free_plan_blocks_sixth_product(store, product_deps, entitlement_checker) -> None:
    """Free plan allows 5 products; the 6th is rejected."""
    add_products(store, TEAM_ID, 5)
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)

    with pytest.raises(LimitExceeded) as exc_info:
        await use_case.execute(MEMBER_ID, TEAM_ID, ProductInput(name="One too many"))

    assert exc_info.value.limit == 5
    assert exc_info.value.current == 5
    assert sum(1 for p in store.products.values() if p.team_id == TEAM_ID) == 5


@pytest.mark.asyncio
async def test_unlimited_plan_never_blocks(store, product_deps, entitlement_checker) -> None:
    store.users[MEMBER_ID].plan_id = ENTERPRISE_PLAN_ID
    add_products(store, TEAM_ID, 500)
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)

    product = await use_case.execute(MEMBER_ID, TEAM_ID, ProductInput(name="Five hundred one"))

    assert product.id in store.products


@pytest.mark.asyncio
async def test_missing_limit_blocks_creation(store, product_deps, entitlement_checker) -> None:
    store.plan_limits["1"].pop("5")
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)
    with pytest.raises(LimitExceeded):
        await use_case.execute(MEMBER_ID, TEAM_ID, ProductInput(name="Widget"))


@pytest.mark.asyncio
async def test_viewer_cannot_create_product(product_deps, entitlement_checker) -> None:
    """Team membership alone is not enough without the global permission."""
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)
    with pytest.raises(PermissionDenied):
        await use_case.execute(VIEWER_ID, TEAM_ID, ProductInput(name="Widget"))


@pytest.mark.asyncio
async def test_non_member_cannot_create_product(product_deps, entitlement_checker) -> None:
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)
    with pytest.raises(PermissionDenied):
        await use_case.execute(OUTSIDER_ID, TEAM_ID, ProductInput(name="Widget"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [ProductInput(name="X"), ProductInput(name="x" * 101), ProductInput(name="Ok", description="d" * 501)],
)
async def test_product_validation(product_deps, entitlement_checker, data) -> None:
    use_case = CreateProductUseCase(*product_deps, entitlement_checker)
    with pytest.raises(ValidationError):
        await use_case.execute(MEMBER_ID, TEAM_ID, data)


@pytest.mark.asyncio
async def test_list_products_is_team_scoped(store, product_deps) -> None:
    mine = add_products(store, TEAM_ID, 2)
    add_products(store, OTHER_TEAM_ID, 3)

    products = await ListProductsUseCase(*product_deps).execute(MEMBER_ID, TEAM_ID)

    assert {p.id for p in products} == {p.id for p in mine}


@pytest.mark.asyncio
async def test_list_products_without_team_is_empty(store, product_deps) -> None:
    add_products(store, TEAM_ID, 2)
    assert await ListProductsUseCase(*product_deps).execute(MEMBER_ID, None) == []


@pytest.mark.asyncio
async def test_list_products_of_foreign_team(store, product_deps) -> None:
    add_products(store, OTHER_TEAM_ID, 1)
    with pytest.raises(PermissionDenied):
        await ListProductsUseCase(*product_deps).execute(MEMBER_ID, OTHER_TEAM_ID)


@pytest.mark.asyncio
async def test_update_product(store, product_deps) -> None:
    (product,) = add_products(store, TEAM_ID, 1)

    updated = await UpdateProductUseCase(*product_deps).execute(
        MEMBER_ID,
        TEAM_ID,
        product.id,
        ProductInput(name="Renamed", status=ProductStatus.INACTIVE),
    )

    assert updated.name == "Renamed"
    assert store.products[product.id].status == ProductStatus.INACTIVE


@pytest.mark.asyncio
async def test_cross_team_product_is_not_found(store, product_deps) -> None:
    """A product id from another team behaves as if it did not exist."""
    (foreign,) = add_products(store, OTHER_TEAM_ID, 1)

    with pytest.raises(NotFound):
        await UpdateProductUseCase(*product_deps).execute(
            MEMBER_ID, TEAM_ID, foreign.id, ProductInput(name="Hijack")
        )
    with pytest.raises(NotFound):
        await DeleteProductUseCase(*product_deps).execute(MEMBER_ID, TEAM_ID, foreign.id)
    assert store.products[foreign.id].name != "Hijack"


@pytest.mark.asyncio
async def test_delete_product(store, product_deps) -> None:
    (product,) = add_products(store, TEAM_ID, 1)
    await DeleteProductUseCase(*product_deps).execute(MEMBER_ID, TEAM_ID, product.id)
    assert product.id not in store.products


@pytest.mark.asyncio
async def test_viewer_cannot_delete_product(store, product_deps) -> None:
    (product,) = add_products(store, TEAM_ID, 1)
    with pytest.raises(PermissionDenied):
        await DeleteProductUseCase(*product_deps).execute(VIEWER_ID, TEAM_ID, product.id)
