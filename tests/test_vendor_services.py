import pytest

from marketplace.core.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from marketplace.core.pagination import PaginationParams
from marketplace.domain import DocumentStatus, StoreDocument, User, UserRole, UserStatus
from marketplace.schemas.document_type import DocumentTypeCreate, DocumentTypeUpdate
from marketplace.schemas.store_document import DocumentUpload
from marketplace.schemas.vendor_request import VendorRequestCreate
from marketplace.services.document_type import DocumentTypeService
from marketplace.services.store_document import StoreDocumentService
from marketplace.services.vendor_request import VendorRequestService

pytestmark = pytest.mark.asyncio


def _page(page: int = 1, limit: int = 20) -> PaginationParams:
    return PaginationParams(page=page, limit=limit, sort="created_at", order="desc")


async def test_vendor_request_copies_profile_fields(session, make_user):
    user = await make_user(first_name="Dev", last_name=None, city=None)

    result = await VendorRequestService(session).create_vendor_request(
        user.id,
        VendorRequestCreate(
            store_name="  Dev Textiles ",
            last_name="Malhotra",
            city="Surat",
            business_type="Textiles",
            instagram_url="https://instagram.com/devtextiles",
        ),
    )

    assert result.role is UserRole.VENDOR_PENDING
    assert result.status == "PENDING"
    user = await session.get(User, user.id, populate_existing=True)
    assert (user.last_name, user.city, user.business_type) == ("Malhotra", "Surat", "Textiles")
    assert user.instagram_url == "https://instagram.com/devtextiles"
    assert user.status is UserStatus.PENDING

    status = await VendorRequestService(session).get_vendor_request_status(user.id)
    assert status.store.store_name == "Dev Textiles"
    assert status.store.user_name == "devmalhotra"


async def test_vendor_request_handle_is_made_unique(session, make_user):
    first = await make_user(first_name="Anu", last_name="Rao")
    second = await make_user(first_name="Anu", last_name="Rao")
    service = VendorRequestService(session)

    a = await service.create_vendor_request(first.id, VendorRequestCreate(store_name="Anu One"))
    b = await service.create_vendor_request(second.id, VendorRequestCreate(store_name="Anu Two"))

    handles = {
        (await service.get_vendor_request_status(first.id)).store.user_name,
        (await service.get_vendor_request_status(second.id)).store.user_name,
    }
    assert a.store_id != b.store_id
    assert "anurao" in handles
    assert f"anurao-{second.id[:8]}" in handles


async def test_vendor_request_rejects_admins(session, make_user):
    admin = await make_user(role=UserRole.ADMIN)

    with pytest.raises(ConflictError):
        await VendorRequestService(session).create_vendor_request(
            admin.id, VendorRequestCreate(store_name="Admin Mart")
        )


async def test_upload_skips_incomplete_entries_and_routes_social_links(session, make_vendor):
    seeded = await make_vendor()
    service = StoreDocumentService(session)

    result = await service.upload_documents(
        seeded.user.id,
        [
            DocumentUpload(document_type="GST", file_url="https://files.example.com/gst.pdf"),
            DocumentUpload(document_type="YouTube_URL", file_url="https://youtube.com/@shop"),
            DocumentUpload(document_type="PAN", file_url=None),
            {"document_type": "Cheque", "file_url": "https://files.example.com/cheque.pdf"},
        ],
    )

    assert result.store_id == seeded.store.id
    assert sorted(d.document_type for d in result.documents) == ["Cheque", "GST"]
    assert {d.status for d in result.documents} == {DocumentStatus.PENDING}
    user = await session.get(User, seeded.user.id, populate_existing=True)
    assert user.youtube_url == "https://youtube.com/@shop"


async def test_upload_requires_documents_and_a_known_user(session):
    service = StoreDocumentService(session)

    with pytest.raises(InvalidArgumentError):
        await service.upload_documents("anyone", [])
    with pytest.raises(NotFoundError):
        await service.upload_documents(
            "nobody", [DocumentUpload(document_type="GST", file_url="https://x.example/gst.pdf")]
        )


async def test_delete_is_soft_and_owner_scoped(session, make_vendor):
    seeded = await make_vendor(documents=[DocumentStatus.PENDING])
    other = await make_vendor()
    service = StoreDocumentService(session)
    doc_id = seeded.documents[0].id

    with pytest.raises(NotFoundError):
        await service.delete_document(other.user.id, doc_id)

    await service.delete_document(seeded.user.id, doc_id)

    row = await session.get(StoreDocument, doc_id, populate_existing=True)
    assert row is not None
    assert row.is_deleted
    assert await service.list_documents(seeded.user.id) == []
    with pytest.raises(NotFoundError):
        await service.get_document(seeded.user.id, doc_id)


async def test_admin_listing_filters_by_document_type(session, make_vendor):
    await make_vendor(documents=[DocumentStatus.PENDING, DocumentStatus.APPROVED])
    service = StoreDocumentService(session)

    rows, total = await service.list_all_documents(_page(), document_type="doc_2")

    assert total == 1
    document, owner = rows[0]
    assert document.document_type == "DOC_2"
    assert owner.id == document.owner_vendor_id


async def test_document_type_service(session):
    service = DocumentTypeService(session)

    created = await service.create_document_type(DocumentTypeCreate(name="  Trade Licence "))
    assert created.name == "Trade Licence"

    unchanged = await service.update_document_type(created.id, DocumentTypeUpdate())
    assert unchanged.name == "Trade Licence"

    with pytest.raises(ConflictError):
        await service.create_document_type(DocumentTypeCreate(name="trade licence"))
    with pytest.raises(InvalidArgumentError):
        await service.create_document_type(DocumentTypeCreate(name="   "))

    items, total = await service.list_document_types(_page(), search="trade")
    assert total == 1 and items[0].id == created.id

    await service.delete_document_type(created.id)
    with pytest.raises(NotFoundError):
        await service.get_document_type(created.id)
    with pytest.raises(NotFoundError):
        await service.delete_document_type(created.id)
