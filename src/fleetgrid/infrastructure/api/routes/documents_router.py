"""Tabular document routes.

Creation and own-document listing are MANAGER only; the fleet-wide listing
is ADMIN only. Reads and edits are open to the owner or any ADMIN, while
delete and duplicate are reserved to the owner.
"""

from fastapi import APIRouter, File, Response, UploadFile, status

from fleetgrid.core.logging import get_logger
from fleetgrid.domain.services import DirectoryService, DocumentService
from fleetgrid.infrastructure.api.dependencies import (
    AdminIdentity,
    AppSettings,
    AuthenticatedIdentity,
    DbSession,
    ManagerIdentity,
    StaffIdentity,
)
from fleetgrid.infrastructure.api.schemas import (
    AccountResponse,
    CreateDocumentRequest,
    DocumentCreatedResponse,
    DocumentDetailResponse,
    DocumentListResponse,
    DocumentMutationResponse,
    DocumentResponse,
    DocumentSummaryResponse,
    EditCellRequest,
    MessageResponse,
    OwnedDocumentListResponse,
    OwnedDocumentResponse,
    RenameHeaderRequest,
    UpdateDocumentRequest,
)
from fleetgrid.infrastructure.persistence.models import TabularDocumentModel
from fleetgrid.infrastructure.spreadsheet import XLSX_MEDIA_TYPE

logger = get_logger(__name__)

router = APIRouter()

UPDATED = "File updated successfully"


def _mutation(message: str, document: TabularDocumentModel) -> DocumentMutationResponse:
    return DocumentMutationResponse(
        message=message, file=DocumentResponse.model_validate(document)
    )


def _created(message: str, document: TabularDocumentModel) -> DocumentCreatedResponse:
    return DocumentCreatedResponse(
        message=message, file=DocumentSummaryResponse.model_validate(document)
    )


@router.post("/create", response_model=DocumentCreatedResponse)
async def create_document(
    request: CreateDocumentRequest,
    manager: ManagerIdentity,
    session: DbSession,
) -> DocumentCreatedResponse:
    """Create an empty document from a template or a header list."""
    document = await DocumentService(session).create_from_request(
        manager,
        template=request.template,
        name=request.name,
        headers=request.headers,
    )
    return _created("File created successfully", document)


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    response_model=DocumentCreatedResponse,
    responses={400: {"description": "Missing, unsupported or unreadable file"}},
)
async def upload_document(
    manager: ManagerIdentity,
    session: DbSession,
    settings: AppSettings,
    file: UploadFile | None = File(None, description="Workbook to import"),
) -> DocumentCreatedResponse:
    """Import the first sheet of an uploaded workbook as a new document."""
    filename = file.filename if file is not None else None
    content = await file.read() if file is not None else b""

    document = await DocumentService(session).create_from_upload(
        manager, content, filename, max_size=settings.max_upload_size
    )
    return _created("File uploaded successfully", document)


@router.get("", response_model=DocumentListResponse)
async def list_own_documents(manager: ManagerIdentity, session: DbSession) -> DocumentListResponse:
    """The caller's documents without row data, newest first."""
    documents = await DocumentService(session).list_own(manager)
    return DocumentListResponse(
        files=[DocumentSummaryResponse.model_validate(doc) for doc in documents]
    )


@router.get("/admin", response_model=OwnedDocumentListResponse)
async def list_all_documents(admin: AdminIdentity, session: DbSession) -> OwnedDocumentListResponse:
    """Every document with its owner; ``owner`` is null when the owner is gone."""
    listings = await DirectoryService(session).list_documents_with_owners()
    return OwnedDocumentListResponse(
        files=[
            OwnedDocumentResponse(
                **DocumentSummaryResponse.model_validate(listing.document).model_dump(),
                owner=AccountResponse.model_validate(listing.owner)
                if listing.owner is not None
                else None,
            )
            for listing in listings
        ]
    )


@router.get("/{document_id}", response_model=DocumentDetailResponse)
async def get_document(
    document_id: str, identity: AuthenticatedIdentity, session: DbSession
) -> DocumentDetailResponse:
    document = await DocumentService(session).get(document_id, identity)
    return DocumentDetailResponse(file=DocumentResponse.model_validate(document))


@router.put(
    "/{document_id}",
    response_model=DocumentMutationResponse,
    responses={409: {"description": "Version precondition failed"}},
)
async def update_document(
    document_id: str,
    request: UpdateDocumentRequest,
    identity: AuthenticatedIdentity,
    session: DbSession,
) -> DocumentMutationResponse:
    """Replace any of name, headers and rows."""
    document = await DocumentService(session).update_fields(
        document_id, identity, request.model_dump(exclude_unset=True)
    )
    return _mutation(UPDATED, document)


@router.patch("/{document_id}/cells", response_model=DocumentMutationResponse)
async def edit_cell(
    document_id: str,
    request: EditCellRequest,
    identity: AuthenticatedIdentity,
    session: DbSession,
) -> DocumentMutationResponse:
    document = await DocumentService(session).edit_cell(
        document_id, identity, request.row_index, request.header, request.value
    )
    return _mutation(UPDATED, document)


@router.patch("/{document_id}/headers", response_model=DocumentMutationResponse)
async def rename_header(
    document_id: str,
    request: RenameHeaderRequest,
    identity: AuthenticatedIdentity,
    session: DbSession,
) -> DocumentMutationResponse:
    document = await DocumentService(session).rename_header(
        document_id, identity, request.old, request.new
    )
    return _mutation(UPDATED, document)


@router.post("/{document_id}/rows", response_model=DocumentMutationResponse)
async def add_row(
    document_id: str, identity: AuthenticatedIdentity, session: DbSession
) -> DocumentMutationResponse:
    document = await DocumentService(session).add_row(document_id, identity)
    return _mutation(UPDATED, document)


@router.delete("/{document_id}/rows/{index}", response_model=DocumentMutationResponse)
async def delete_row(
    document_id: str, index: int, identity: AuthenticatedIdentity, session: DbSession
) -> DocumentMutationResponse:
    document = await DocumentService(session).delete_row(document_id, identity, index)
    return _mutation(UPDATED, document)


@router.post("/{document_id}/columns", response_model=DocumentMutationResponse)
async def add_column(
    document_id: str, identity: AuthenticatedIdentity, session: DbSession
) -> DocumentMutationResponse:
    document = await DocumentService(session).add_column(document_id, identity)
    return _mutation(UPDATED, document)


# Header labels may contain "/"
@router.delete("/{document_id}/columns/{label:path}", response_model=DocumentMutationResponse)
async def delete_column(
    document_id: str, label: str, identity: AuthenticatedIdentity, session: DbSession
) -> DocumentMutationResponse:
    document = await DocumentService(session).delete_column(document_id, identity, label)
    return _mutation(UPDATED, document)


@router.delete(
    "/{document_id}",
    response_model=MessageResponse,
    responses={404: {"description": "Missing, or not owned by the caller"}},
)
async def delete_document(
    document_id: str, identity: StaffIdentity, session: DbSession
) -> MessageResponse:
    """Delete a document the caller owns. Admins get no override."""
    await DocumentService(session).delete(document_id, identity)
    return MessageResponse(message="File deleted successfully")


@router.post(
    "/{document_id}/duplicate",
    status_code=status.HTTP_201_CREATED,
    response_model=DocumentCreatedResponse,
)
async def duplicate_document(
    document_id: str, identity: StaffIdentity, session: DbSession
) -> DocumentCreatedResponse:
    """Copy a document the caller owns."""
    document = await DocumentService(session).duplicate(document_id, identity)
    return _created("File duplicated successfully", document)


@router.get(
    "/{document_id}/download",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}},
)
async def download_document(
    document_id: str, identity: AuthenticatedIdentity, session: DbSession
) -> Response:
    """Stream the document as an xlsx workbook."""
    content, filename = await DocumentService(session).export(document_id, identity)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
