"""ResourceService: framework-neutral CRUD orchestration for one resource.

Ties the pieces together for each request: content negotiation, query
parsing and filter validation, conversion to store descriptors, the store
call, and rendering through the negotiated representation. Store exceptions
are translated here, once, into the problem taxonomy.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

from docrest_core.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidBodyError,
    OperationDisabledError,
    ProblemError,
)
from docrest_core.ports import Document, DocumentStore, EntityConverter
from docrest_filtering.query_params import QueryParamsParser
from docrest_filtering.validator import FilterValidator
from docrest_filtering.whitelist import FieldWhitelist
from docrest_representations import (
    DEFAULT_REPRESENTATIONS,
    Capability,
    RelativeUrl,
    Representation,
    RepresentationRegistry,
)

from .config import ControllerOptions, Operation

_log = logging.getLogger(__name__)

T = TypeVar("T")

ErrorTranslator = Callable[[BaseException, str], ProblemError]


def default_error_translator(error: BaseException, entity_name: str) -> ProblemError:
    """Keep problem errors, report anything else as a 500."""
    if isinstance(error, ProblemError):
        return error
    return ProblemError(str(error), title=type(error).__name__, status=500)


@dataclass(frozen=True)
class RenderedResponse:
    """What the HTTP layer sends back."""

    status: int
    body: dict[str, Any] | None = None
    content_type: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


class ResourceService:
    """CRUD operations of a single resource over a :class:`DocumentStore`."""

    def __init__(
        self,
        store: DocumentStore,
        converter: EntityConverter,
        entity_name: str,
        *,
        options: ControllerOptions | None = None,
        representations: Iterable[Representation] | None = None,
        whitelist: FieldWhitelist | None = None,
        error_translator: ErrorTranslator = default_error_translator,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.converter = converter
        self.entity_name = entity_name
        self.options = options or ControllerOptions()
        self.resource_type = self.options.resource_type or entity_name
        self.registry = RepresentationRegistry(
            DEFAULT_REPRESENTATIONS if representations is None else representations
        )
        self.whitelist = whitelist or FieldWhitelist.unrestricted()
        self._translate = error_translator
        self._log = logger or _log
        validator_options = self.options.operator_validator
        self.filter_validator = FilterValidator(
            self.options.operators,
            self.whitelist.filterable_fields,
            validator_options.action,
            escape_invalid_logical=validator_options.escape_invalid_logical_operator,
        )
        self.query_parser = QueryParamsParser(
            default_page_size=self.options.page_size.default,
            max_page_size=self.options.page_size.max,
        )

    # ── Helpers ──────────────────────────────────────────────────────

    def is_enabled(self, operation: Operation) -> bool:
        return not self.options.is_disabled(operation)

    def _ensure_enabled(self, operation: Operation) -> None:
        if not self.is_enabled(operation):
            raise OperationDisabledError(
                f'The operation "{operation.value}" is disabled for '
                f'resource "{self.resource_type}"'
            )

    @contextmanager
    def _logged(self, operation: Operation) -> Iterator[None]:
        try:
            yield
        except ConfigurationError as e:
            self._log.error(
                "%s %s: server misconfiguration: %s",
                operation.value,
                self.resource_type,
                e,
            )
            raise
        except ProblemError as e:
            self._log.debug(
                "%s %s rejected (%s): %s",
                operation.value,
                self.resource_type,
                e.status,
                e.detail,
            )
            raise

    async def _call_store(
        self, func: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any
    ) -> T:
        try:
            return await func(*args, **kwargs)
        except ProblemError:
            raise
        except Exception as e:  # noqa: BLE001
            problem = self._translate(e, self.entity_name)
            if problem.status >= 500:
                self._log.warning(
                    "Store failure on %s: %s", self.entity_name, e, exc_info=True
                )
            raise problem from e

    def _id_of(self, document: Document) -> str:
        return str(document[self.options.id_field])

    @staticmethod
    def _require_object(parsed: Any) -> Mapping[str, Any]:
        if not isinstance(parsed, Mapping):
            raise InvalidBodyError("The body MUST defined and of type object")
        return parsed

    # ── Operations ───────────────────────────────────────────────────

    async def get_list(
        self, query_params: Any, url: str, accept: str | None = None
    ) -> RenderedResponse:
        """List a page of resources matching ``filters``."""
        with self._logged(Operation.LIST):
            self._ensure_enabled(Operation.LIST)
            representation = self.registry.negotiate(Capability.RENDER_PAGE, accept)
            query = self.query_parser.parse(query_params)
            action = self.filter_validator.action
            filters = self.filter_validator.validate(query.filters)
            fields = self.whitelist.filter_projection(query.fields, action)
            sort = self.whitelist.filter_sort(query.sort, action)

            store_query = self.converter.from_searchable(filters)
            projection = self.converter.from_dto_fields(fields)
            store_sort = self.converter.from_dto_sort(sort)
            documents = await self._call_store(
                self.store.find,
                store_query,
                projection,
                limit=query.page.size,
                skip=query.page.offset,
                sort=store_sort,
            )
            count = await self._call_store(self.store.count, store_query)

            resources = {
                self._id_of(doc): self.converter.to_dto(doc) for doc in documents
            }
            render_page = self.registry.renderer(
                Capability.RENDER_PAGE, representation.content_type
            )
            body = render_page(
                self.resource_type, url, count, query.page, resources
            )
            return RenderedResponse(200, body, representation.content_type)

    async def get_one(
        self,
        entity_id: str,
        url: str,
        query_params: Any = None,
        accept: str | None = None,
    ) -> RenderedResponse:
        with self._logged(Operation.GET):
            self._ensure_enabled(Operation.GET)
            representation = self.registry.negotiate(Capability.RENDER_ONE, accept)
            fields = self.whitelist.filter_projection(
                self.query_parser.parse_fields(query_params or ()),
                self.filter_validator.action,
            )
            projection = self.converter.from_dto_fields(fields)
            document = await self._call_store(
                self.store.find_by_id, entity_id, projection
            )
            if document is None:
                raise EntityNotFoundError(self.entity_name, entity_id)
            render_one = self.registry.renderer(
                Capability.RENDER_ONE, representation.content_type
            )
            body = render_one(
                entity_id, self.resource_type, url, self.converter.to_dto(document)
            )
            return RenderedResponse(200, body, representation.content_type)

    async def create_one(
        self,
        body: Any,
        url: str,
        content_type: str | None = None,
        accept: str | None = None,
    ) -> RenderedResponse:
        """Create a resource; 204 when reading is disabled."""
        with self._logged(Operation.CREATE):
            self._ensure_enabled(Operation.CREATE)
            request_type = self.registry.negotiate(
                Capability.PARSE_CREATE, content_type
            ).content_type
            representation = self.registry.negotiate(Capability.RENDER_ONE, accept)
            parse = self.registry.parser(Capability.PARSE_CREATE, request_type)
            creator = self._require_object(parse(body, self.resource_type))

            created = await self._call_store(
                self.store.insert, self.converter.from_creator(creator)
            )
            entity_id = self._id_of(created)
            location = str(
                RelativeUrl.from_string(url).clear_params().append_path(entity_id)
            )
            self._log.info("Created %s %s", self.entity_name, entity_id)
            if self.options.disable.read:
                return RenderedResponse(204, headers={"Location": location})
            render_one = self.registry.renderer(
                Capability.RENDER_ONE, representation.content_type
            )
            rendered = render_one(
                entity_id, self.resource_type, location, self.converter.to_dto(created)
            )
            return RenderedResponse(
                201, rendered, representation.content_type, {"Location": location}
            )

    async def update_one(
        self,
        entity_id: str,
        body: Any,
        url: str,
        query_params: Any = None,
        content_type: str | None = None,
        accept: str | None = None,
        *,
        no_content: bool = False,
    ) -> RenderedResponse:
        """Patch a resource; 204 when nothing changed or no body is wanted."""
        with self._logged(Operation.UPDATE):
            self._ensure_enabled(Operation.UPDATE)
            request_type = self.registry.negotiate(
                Capability.PARSE_UPDATE, content_type
            ).content_type
            representation = self.registry.negotiate(Capability.RENDER_ONE, accept)
            parse = self.registry.parser(Capability.PARSE_UPDATE, request_type)
            updater = self._require_object(
                parse(body, self.resource_type, entity_id)
            )

            result = await self._call_store(
                self.store.update_by_id,
                entity_id,
                self.converter.from_updater(entity_id, updater),
            )
            if result.matched_count == 0:
                raise EntityNotFoundError(self.entity_name, entity_id, "update")
            if result.modified_count == 0 or no_content or self.options.disable.read:
                return RenderedResponse(204)

            fields = self.whitelist.filter_projection(
                self.query_parser.parse_fields(query_params or ()),
                self.filter_validator.action,
            )
            document = await self._call_store(
                self.store.find_by_id,
                entity_id,
                self.converter.from_dto_fields(fields),
            )
            if document is None:
                raise EntityNotFoundError(self.entity_name, entity_id, "update")
            self_url = str(RelativeUrl.from_string(url).only_keep_params(["fields"]))
            render_one = self.registry.renderer(
                Capability.RENDER_ONE, representation.content_type
            )
            rendered = render_one(
                entity_id, self.resource_type, self_url, self.converter.to_dto(document)
            )
            return RenderedResponse(200, rendered, representation.content_type)

    async def delete_one(self, entity_id: str) -> RenderedResponse:
        with self._logged(Operation.DELETE):
            self._ensure_enabled(Operation.DELETE)
            result = await self._call_store(self.store.delete_by_id, entity_id)
            if result.deleted_count == 0:
                raise EntityNotFoundError(self.entity_name, entity_id, "delete")
            self._log.info("Deleted %s %s", self.entity_name, entity_id)
            return RenderedResponse(204)
