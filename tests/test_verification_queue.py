import pytest
from sqlalchemy import func, select

from marketplace.domain import DocumentStatus, Store, UserRole, UserStatus
from marketplace.repositories.store import PLACEHOLDER_PIN_CODE
from marketplace.services.verification import VerificationService

pytestmark = pytest.mark.asyncio


async def _seed_queue(make_user, make_vendor):
    """Two verified, one rejected and two pending vendors, plus users outside the queue."""
    verified = [
        await make_vendor(
            status=UserStatus.APPROVED, is_verified=True, documents=[DocumentStatus.APPROVED]
        )
        for _ in range(2)
    ]
    rejected = await make_vendor(
        status=UserStatus.REJECTED, is_rejected=True, documents=[DocumentStatus.REJECTED]
    )
    pending = [
        await make_vendor(documents=[DocumentStatus.PENDING, DocumentStatus.APPROVED])
        for _ in range(2)
    ]
    await make_user(role=UserRole.CUSTOMER)
    applicant = await make_vendor(role=UserRole.VENDOR_PENDING, documents=[DocumentStatus.PENDING])
    return verified, rejected, pending, applicant


async def test_stats_cover_the_whole_queue_regardless_of_paging(session, make_user, make_vendor):
    await _seed_queue(make_user, make_vendor)
    service = VerificationService(session, include_pending_in_queue=False)

    first = await service.list_unverified_vendors(page=1, limit=2)
    last = await service.list_unverified_vendors(page=3, limit=2)
    beyond = await service.list_unverified_vendors(page=9, limit=2)

    for result in (first, last, beyond):
        assert result.stats.total_vendors == 5
        assert result.stats.verified_count == 2
        assert result.stats.rejected_count == 1
        assert result.stats.unverified_count == 2
        assert result.stats.documents == {"PENDING": 2, "APPROVED": 4, "REJECTED": 1}
        assert result.pagination.total_items == 5
        assert result.pagination.total_pages == 3
        assert result.pagination.items_per_page == 2

    assert len(first.data) == 2
    assert len(last.data) == 1
    assert beyond.data == []
    assert first.pagination.current_page == 1


async def test_stats_are_unaffected_by_filters(session, make_user, make_vendor):
    await _seed_queue(make_user, make_vendor)
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors(status="REJECTED")

    assert len(result.data) == 1
    assert result.pagination.total_items == 1
    assert result.stats.total_vendors == 5


async def test_pending_applicants_are_listed_only_when_enabled(session, make_user, make_vendor):
    *_, applicant = await _seed_queue(make_user, make_vendor)

    without = await VerificationService(session, include_pending_in_queue=False).list_unverified_vendors(limit=50)
    with_pending = await VerificationService(session, include_pending_in_queue=True).list_unverified_vendors(limit=50)

    assert applicant.user.id not in {item.vendor.id for item in without.data}
    assert applicant.user.id in {item.vendor.id for item in with_pending.data}
    assert with_pending.stats.total_vendors == 6


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("VERIFIED", "APPROVED"),
        ("approved", "APPROVED"),
        ("UNVERIFIED", "PENDING"),
        ("pending", "PENDING"),
        ("REJECTED", "REJECTED"),
    ],
)
async def test_status_filter_matches_resolved_status(session, make_user, make_vendor, status, expected):
    await _seed_queue(make_user, make_vendor)
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors(status=status, limit=50)

    assert result.data
    assert {item.vendor.status for item in result.data} == {expected}


async def test_form_approved_filter(session, make_vendor):
    form_approved = await make_vendor(status=UserStatus.APPROVED)
    await make_vendor()
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors(status="FORM_APPROVED")

    assert [item.vendor.id for item in result.data] == [form_approved.user.id]
    assert result.data[0].vendor.status == "FORM_APPROVED"


async def test_unknown_status_filter_is_ignored(session, make_user, make_vendor):
    await _seed_queue(make_user, make_vendor)
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors(status="SOMETIMES", limit=50)

    assert len(result.data) == 5
    assert result.pagination.total_items == 5


async def test_unknown_document_status_matches_no_vendor(session, make_user, make_vendor):
    await _seed_queue(make_user, make_vendor)
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors(document_status="LOST", limit=50)

    assert result.data == []
    assert result.pagination.total_items == 0
    assert result.stats.total_vendors == 5


async def test_document_status_filter(session, make_vendor):
    with_rejected = await make_vendor(documents=[DocumentStatus.APPROVED, DocumentStatus.REJECTED])
    await make_vendor(documents=[DocumentStatus.APPROVED])
    await make_vendor()
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors(document_status="rejected")

    assert [item.vendor.id for item in result.data] == [with_rejected.user.id]
    assert len(result.data[0].documents) == 2


async def test_search_matches_vendor_and_store_fields(session, make_vendor):
    meera = await make_vendor(first_name="Meera", email="meera@handloom.in", store_name="Handloom House")
    await make_vendor(first_name="Karan", email="karan@spices.in", store_name="Spice Route")
    service = VerificationService(session, include_pending_in_queue=False)

    by_store = await service.list_unverified_vendors(search="handLOOM house")
    by_name = await service.list_unverified_vendors(search="  meera ")
    nothing = await service.list_unverified_vendors(search="pottery")

    assert [item.vendor.id for item in by_store.data] == [meera.user.id]
    assert [item.vendor.id for item in by_name.data] == [meera.user.id]
    assert nothing.data == []
    assert nothing.pagination.total_pages == 1
    assert nothing.stats.total_vendors == 2


async def test_missing_store_is_created_with_placeholder_values(session, make_vendor):
    seeded = await make_vendor(
        first_name="Ravi",
        last_name="Kumar Singh",
        city="Jaipur",
        with_store=False,
        documents=[DocumentStatus.PENDING],
    )
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors()

    assert len(result.data) == 1
    store = result.data[0].store
    assert store.vendor_id == seeded.user.id
    assert store.store_name == "Ravi's Store"
    assert store.user_name == "ravikumarsingh"
    assert store.pin_code == PLACEHOLDER_PIN_CODE
    assert store.city == "Jaipur"
    assert store.is_verified is False
    assert result.stats.unverified_count == 1


async def test_store_materialisation_happens_once(session, make_vendor):
    seeded = await make_vendor(with_store=False)
    service = VerificationService(session, include_pending_in_queue=False)

    first = await service.list_unverified_vendors()
    second = await service.list_unverified_vendors()

    assert first.data[0].store.id == second.data[0].store.id
    count = await session.scalar(
        select(func.count()).select_from(Store).where(Store.vendor_id == seeded.user.id)
    )
    assert count == 1


async def test_placeholder_handles_do_not_collide(session, make_vendor):
    await make_vendor(first_name="Ravi", last_name="Kumar", with_store=False)
    await make_vendor(first_name="Ravi", last_name="Kumar", with_store=False)
    service = VerificationService(session, include_pending_in_queue=False)

    result = await service.list_unverified_vendors()

    handles = [item.store.user_name for item in result.data]
    assert len(result.data) == 2
    assert len(set(handles)) == 2
    assert "ravikumar" in handles


async def test_vendor_with_failing_store_creation_is_skipped(session, make_vendor, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from marketplace.repositories.store import StoreRepository

    healthy = await make_vendor()
    await make_vendor(with_store=False)
    real_ensure = StoreRepository.ensure_for_vendor

    async def _flaky(self, vendor):
        if vendor.id != healthy.user.id:
            raise OperationalError("INSERT INTO stores", {}, Exception("disk I/O error"))
        return await real_ensure(self, vendor)

    monkeypatch.setattr(StoreRepository, "ensure_for_vendor", _flaky)
    result = await VerificationService(session, include_pending_in_queue=False).list_unverified_vendors()

    assert [item.vendor.id for item in result.data] == [healthy.user.id]
    assert result.stats.total_vendors == 1


async def test_queue_reflects_decisions(session, make_vendor):
    seeded = await make_vendor(documents=[DocumentStatus.PENDING])
    service = VerificationService(session, include_pending_in_queue=False)

    await service.update_document_status(seeded.user.id, seeded.documents[0].id, "APPROVED")
    result = await service.list_unverified_vendors(status="VERIFIED")

    assert [item.vendor.id for item in result.data] == [seeded.user.id]
    assert result.stats.verified_count == 1
    assert result.stats.documents["APPROVED"] == 1
