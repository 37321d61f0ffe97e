"""Tabular document engine.

Owns the lifecycle of a document: creation from a template, a header list or
an uploaded workbook; field, cell and structure edits; duplication, deletion
and export. Structural rules live on the ``TabularDocument`` entity; this
service loads the stored record, checks ownership, applies the entity
operation and persists the result in a single commit.
"""

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from fleetgrid.core.logging import get_logger
from fleetgrid.domain.entities import (
    Identity,
    TabularDocument,
    clean_headers,
    clean_name,
    clean_rows,
    name_from_filename,
)
from fleetgrid.domain.exceptions import ConflictError, NotFoundError, ValidationError
from fleetgrid.domain.services.access_gate import DOCUMENT_NOT_FOUND, AccessGate
from fleetgrid.domain.services.document_templates import get_template, is_known_template
from fleetgrid.infrastructure.persistence.models import TabularDocumentModel
from fleetgrid.infrastructure.persistence.repositories import DocumentRepository
from fleetgrid.infrastructure.spreadsheet import decode_first_sheet, encode_grid

logger = get_logger(__name__)

DEFAULT_DOCUMENT_NAME = "New Spreadsheet"
ALLOWED_UPLOAD_EXTENSIONS = (".xlsx", ".xls")


def parse_document_id(document_id: str) -> str:
    """Return the canonical form of a document ID.

    Raises:
        ValidationError: If ``document_id`` is not a UUID.
    """
    try:
        return str(uuid.UUID(str(document_id)))
    except ValueError as e:
        raise ValidationError("Invalid file ID") from e


def _override_or(name: Any, default: str) -> str:
    if isinstance(name, str) and name.strip():
        return name.strip()
    return default


def _to_entity(model: TabularDocumentModel) -> TabularDocument:
    return TabularDocument(
        name=model.name,
        headers=list(model.headers or []),
        rows=copy.deepcopy(model.rows or []),
        id=model.id,
        owner_id=model.owner_id,
    )


class DocumentService:
    """Service for tabular document operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the document service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.document_repo = DocumentRepository(session)

    # Creation

    async def create_from_template(
        self, identity: Identity, template_key: str | None, name: str | None = None
    ) -> TabularDocumentModel:
        """Create an empty document from a fixed template.

        Unknown template keys fall back to the blank template.
        """
        template = get_template(template_key)
        document = TabularDocument(
            name=_override_or(name, template.name),
            headers=list(template.headers),
            owner_id=identity.id,
        )
        return await self._insert(document, source=f"template:{template.key}")

    async def create_from_headers(
        self, identity: Identity, name: str | None, headers: list[Any]
    ) -> TabularDocumentModel:
        """Create an empty document from a caller-supplied header list.

        Raises:
            ValidationError: If no non-blank string header is given.
        """
        document = TabularDocument.from_headers(
            _override_or(name, DEFAULT_DOCUMENT_NAME), headers, owner_id=identity.id
        )
        return await self._insert(document, source="headers")

    async def create_from_request(
        self,
        identity: Identity,
        template: str | None = None,
        name: str | None = None,
        headers: Any = None,
    ) -> TabularDocumentModel:
        """Dispatch a create request.

        A known template wins, then an explicit header list, then the blank
        template.
        """
        if template and is_known_template(template):
            return await self.create_from_template(identity, template, name)
        if isinstance(headers, list):
            return await self.create_from_headers(identity, name, headers)
        return await self.create_from_template(identity, None, name)

    async def create_from_upload(
        self,
        identity: Identity,
        content: bytes,
        filename: str | None,
        max_size: int | None = None,
    ) -> TabularDocumentModel:
        """Import the first sheet of an uploaded workbook.

        Raises:
            ValidationError: If the file is missing, has the wrong extension,
                is too large, cannot be read, is empty or has no headers.
        """
        if not filename:
            raise ValidationError("No file provided")
        if not filename.lower().endswith(ALLOWED_UPLOAD_EXTENSIONS):
            raise ValidationError("Only .xlsx and .xls files are allowed")
        if max_size is not None and len(content) > max_size:
            raise ValidationError(f"File exceeds the {max_size} byte upload limit")

        grid = decode_first_sheet(content)
        document = TabularDocument.from_grid(
            grid, name_from_filename(filename), owner_id=identity.id
        )
        return await self._insert(document, source="upload")

    # Queries

    async def list_own(self, identity: Identity) -> list[TabularDocumentModel]:
        """Documents owned by the caller, most recently updated first."""
        return await self.document_repo.list_by_owner(identity.id)

    async def get(self, document_id: str, identity: Identity) -> TabularDocumentModel:
        """Load a document the caller may read (owner or ADMIN)."""
        return await self._load(document_id, identity)

    async def export(self, document_id: str, identity: Identity) -> tuple[bytes, str]:
        """Encode a document as an xlsx workbook.

        Returns:
            Tuple of (workbook bytes, sanitized download file name).
        """
        model = await self._load(document_id, identity)
        document = _to_entity(model)
        content = encode_grid(document.to_grid())
        logger.info("Document exported", document_id=model.id, rows=document.row_count)
        return content, document.download_filename

    # Mutations

    async def update_fields(
        self, document_id: str, identity: Identity, changes: dict[str, Any]
    ) -> TabularDocumentModel:
        """Replace any of ``name``, ``headers`` and ``rows``.

        Only keys present in ``changes`` are applied. When ``changes`` holds a
        ``version`` that differs from the stored one, the update is rejected.

        Raises:
            ValidationError: If a supplied field is malformed.
            ConflictError: If the version precondition fails.
        """
        model = await self._load(document_id, identity)

        expected_version = changes.get("version")
        if expected_version is not None and expected_version != model.version:
            logger.info(
                "Document update rejected: stale version",
                document_id=model.id,
                expected=expected_version,
                actual=model.version,
            )
            raise ConflictError("File was modified by another request")

        document = _to_entity(model)
        if "name" in changes:
            document.name = clean_name(changes["name"])
        if "headers" in changes:
            document.headers = clean_headers(changes["headers"])
        if "rows" in changes:
            document.rows = clean_rows(changes["rows"])

        changed = (
            document.name != model.name
            or document.headers != model.headers
            or document.rows != model.rows
        )
        if changed:
            await self._save(model, document, operation="update_fields")
        return model

    async def edit_cell(
        self,
        document_id: str,
        identity: Identity,
        row_index: int,
        header: str,
        value: Any,
    ) -> TabularDocumentModel:
        return await self._mutate(
            document_id,
            identity,
            "edit_cell",
            lambda document: document.edit_cell(row_index, header, value),
        )

    async def rename_header(
        self, document_id: str, identity: Identity, old: str, new: str
    ) -> TabularDocumentModel:
        """Rename a header. Blank or unknown labels leave the document as is."""
        return await self._mutate(
            document_id,
            identity,
            "rename_header",
            lambda document: document.rename_header(old, new),
        )

    async def add_row(self, document_id: str, identity: Identity) -> TabularDocumentModel:
        return await self._mutate(
            document_id, identity, "add_row", lambda document: document.add_row()
        )

    async def delete_row(
        self, document_id: str, identity: Identity, index: int
    ) -> TabularDocumentModel:
        """Delete a row by position. Out-of-range indexes are ignored."""
        return await self._mutate(
            document_id,
            identity,
            "delete_row",
            lambda document: document.delete_row(index),
        )

    async def add_column(
        self, document_id: str, identity: Identity
    ) -> TabularDocumentModel:
        return await self._mutate(
            document_id,
            identity,
            "add_column",
            lambda document: bool(document.add_column()),
        )

    async def delete_column(
        self, document_id: str, identity: Identity, label: str
    ) -> TabularDocumentModel:
        """Delete a column. The last remaining column is kept."""
        return await self._mutate(
            document_id,
            identity,
            "delete_column",
            lambda document: document.delete_column(label),
        )

    async def duplicate(
        self, document_id: str, identity: Identity
    ) -> TabularDocumentModel:
        """Copy a document. Only its literal owner may duplicate it."""
        model = await self._load(document_id, identity, owner_only=True)
        copy_ = _to_entity(model).duplicate(owner_id=identity.id)
        return await self._insert(copy_, source=f"duplicate:{model.id}")

    async def delete(self, document_id: str, identity: Identity) -> None:
        """Delete a document. Only its literal owner may delete it."""
        model = await self._load(document_id, identity, owner_only=True)
        await self.document_repo.delete_by_id(model.id)
        await self.session.commit()
        logger.info("Document deleted", document_id=model.id, owner_id=model.owner_id)

    # Internals

    async def _load(
        self, document_id: str, identity: Identity, owner_only: bool = False
    ) -> TabularDocumentModel:
        model = await self.document_repo.get_by_id(parse_document_id(document_id))
        if model is None:
            raise NotFoundError(DOCUMENT_NOT_FOUND)
        AccessGate.evaluate_document(
            identity, model.owner_id, owner_only=owner_only
        ).raise_if_denied()
        return model

    async def _mutate(
        self,
        document_id: str,
        identity: Identity,
        operation: str,
        apply: Callable[[TabularDocument], bool],
    ) -> TabularDocumentModel:
        model = await self._load(document_id, identity)
        document = _to_entity(model)
        if apply(document):
            await self._save(model, document, operation=operation)
        else:
            logger.debug("Document unchanged", document_id=model.id, operation=operation)
        return model

    async def _insert(self, document: TabularDocument, source: str) -> TabularDocumentModel:
        now = datetime.now(timezone.utc)
        model = TabularDocumentModel(
            id=str(uuid.uuid4()),
            owner_id=document.owner_id,
            name=document.name,
            headers=list(document.headers),
            rows=copy.deepcopy(document.rows),
            version=1,
            created_at=now,
            updated_at=now,
        )
        await self.document_repo.create(model)
        await self.session.commit()
        logger.info(
            "Document created",
            document_id=model.id,
            owner_id=model.owner_id,
            source=source,
            rows=len(model.rows),
        )
        return model

    async def _save(
        self, model: TabularDocumentModel, document: TabularDocument, operation: str
    ) -> None:
        # JSON columns only register changes on reassignment
        model.name = document.name
        model.headers = list(document.headers)
        model.rows = copy.deepcopy(document.rows)
        model.version = model.version + 1
        model.updated_at = datetime.now(timezone.utc)
        await self.session.commit()
        logger.info(
            "Document updated",
            document_id=model.id,
            operation=operation,
            version=model.version,
        )
