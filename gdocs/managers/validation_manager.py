"""
Validation Manager

Argument checks for the Google Docs tools. Each check runs before the
first backend call so a bad argument never leaves a half-edited document.
"""
import logging
from typing import Dict, Any, Iterator, List, Tuple, Optional
from urllib.parse import urlparse

from gdocs.errors import DocsErrorBuilder

logger = logging.getLogger(__name__)

RGB_COMPONENTS = ("red", "green", "blue")
ID_FORBIDDEN_CHARS = "'\"/"


class ValidationManager:
    """
    Input checks shared by all tools.

    ``validate_*`` methods return ``(ok, message)``. The ``*_structured``
    variants return ``(ok, error_json)`` ready to be raised as a ToolError.
    """

    def __init__(self):
        self.validation_rules = self._setup_validation_rules()

    def _setup_validation_rules(self) -> Dict[str, Any]:
        return {
            'table_max_rows': 1000,
            'table_max_columns': 20,
            'min_document_id_length': 20,
            'max_text_length': 1000000,
            'valid_url_schemes': ("http", "https"),
            'image_max_dimension_pt': 2000,
        }

    def validate_document_id(self, document_id: str) -> Tuple[bool, str]:
        if not document_id:
            return False, "Document ID is empty"
        if not isinstance(document_id, str):
            return False, f"Document ID should be a string, not {type(document_id).__name__}"

        # Real IDs are 44 characters; anything much shorter is a typo
        if len(document_id) < self.validation_rules['min_document_id_length']:
            return False, f"Document ID '{document_id}' is too short to be a Google Docs ID"

        if any(ch.isspace() or ch in ID_FORBIDDEN_CHARS for ch in document_id):
            return False, "Pass the bare document ID, without quotes, spaces or URL segments"

        return True, ""

    def validate_index(self, index: int, context: str = "Index") -> Tuple[bool, str]:
        """Body positions start at 1; position 0 belongs to the leading section break."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False, f"{context} should be an integer, not {type(index).__name__}"
        if index < 1:
            return False, f"{context} is {index} but the first body position is 1"
        return True, ""

    def validate_index_range(self, start_index: int, end_index: int) -> Tuple[bool, str]:
        for value, name in ((start_index, "start_index"), (end_index, "end_index")):
            ok, message = self.validate_index(value, name)
            if not ok:
                return False, message
        if end_index <= start_index:
            return False, f"end_index {end_index} is not after start_index {start_index}"
        return True, ""

    def validate_table_dimensions(self, rows: int, columns: int) -> Tuple[bool, str]:
        limits = (
            ("rows", rows, self.validation_rules['table_max_rows']),
            ("columns", columns, self.validation_rules['table_max_columns']),
        )
        for name, value, limit in limits:
            if isinstance(value, bool) or not isinstance(value, int):
                return False, f"{name} should be an integer, not {type(value).__name__}"
            if not 1 <= value <= limit:
                return False, f"{name} is {value}; allowed range is 1 to {limit}"
        return True, ""

    def _table_data_problems(self, table_data: Any) -> Iterator[Tuple[str, Optional[int], Optional[int], Any]]:
        """
        Yield (issue, row, column, value) for every malformed part of table data.

        Rows may be shorter or longer than the table. Missing cells stay empty
        and surplus values are dropped, so only types are checked here.
        """
        if not isinstance(table_data, list):
            yield f"expected a list of rows, got {type(table_data).__name__}", None, None, None
            return
        for row_idx, row in enumerate(table_data):
            if not isinstance(row, list):
                yield f"row {row_idx} is {type(row).__name__}, expected a list", row_idx, None, None
                continue
            for col_idx, cell in enumerate(row):
                if cell is None:
                    yield "cell is None, use '' for an empty cell", row_idx, col_idx, None
                elif not isinstance(cell, str):
                    yield f"cell is {type(cell).__name__}, expected a string", row_idx, col_idx, cell

    def validate_text_content(
        self,
        text: str,
        allow_empty: bool = True,
        max_length: Optional[int] = None
    ) -> Tuple[bool, str]:
        """
        Check text destined for insertion.

        ``allow_empty`` stays True for whole-document replacement, where ''
        means "clear the body".
        """
        if not isinstance(text, str):
            return False, f"Text should be a string, not {type(text).__name__}"
        if not text and not allow_empty:
            return False, "Text is empty"

        limit = max_length or self.validation_rules['max_text_length']
        if len(text) > limit:
            return False, f"Text has {len(text)} characters; the limit is {limit}"
        return True, ""

    def validate_url(self, url: str, param_name: str = "url") -> Tuple[bool, str]:
        if not isinstance(url, str) or not url.strip():
            return False, f"{param_name} is empty"
        parsed = urlparse(url.strip())
        if parsed.scheme not in self.validation_rules['valid_url_schemes'] or not parsed.netloc:
            return False, f"{param_name} '{url}' is not an absolute http(s) URL"
        return True, ""

    def validate_color(
        self,
        color: Optional[Dict[str, float]],
        param_name: str = "foreground_color"
    ) -> Tuple[bool, str]:
        """Colors are {'red', 'green', 'blue'} dicts; omitted components mean 0."""
        if color is None:
            return True, ""
        if not isinstance(color, dict):
            return False, f"{param_name} should be an object, not {type(color).__name__}"

        unknown = sorted(set(color) - set(RGB_COMPONENTS))
        if unknown:
            return False, f"{param_name} has unexpected keys {unknown}"
        for component, value in color.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 <= value <= 1:
                return False, f"{param_name}.{component} is {value!r}; expected a number from 0 to 1"
        return True, ""

    def validate_image_size(self, width: Optional[int], height: Optional[int]) -> Tuple[bool, str]:
        limit = self.validation_rules['image_max_dimension_pt']
        for name, value in (("width", width), ("height", height)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0 < value <= limit:
                return False, f"{name} is {value!r}; expected points between 1 and {limit}"
        return True, ""

    # Structured variants

    def validate_document_id_structured(self, document_id: str) -> Tuple[bool, Optional[str]]:
        ok, message = self.validate_document_id(document_id)
        if ok:
            return True, None
        return False, DocsErrorBuilder.document_not_found(document_id or "(empty)", message).to_json()

    def validate_index_range_structured(
        self,
        start_index: int,
        end_index: int
    ) -> Tuple[bool, Optional[str]]:
        ok, message = self.validate_index_range(start_index, end_index)
        if ok:
            return True, None
        # Both positions are usable, only their order is wrong
        if self.validate_index(start_index)[0] and self.validate_index(end_index)[0]:
            return False, DocsErrorBuilder.invalid_index_range(start_index, end_index).to_json()
        return False, self.create_invalid_param_error(
            param_name="start_index/end_index",
            received=f"{start_index}..{end_index}",
            valid_values=["integers >= 1 with start_index < end_index"],
            context=message,
        )

    def validate_table_data_structured(self, table_data: List[List[str]]) -> Tuple[bool, Optional[str]]:
        """None is accepted: the table is created empty."""
        if table_data is None:
            return True, None
        for issue, row_idx, col_idx, value in self._table_data_problems(table_data):
            error = DocsErrorBuilder.invalid_table_data(issue, row_index=row_idx, col_index=col_idx, value=value)
            return False, error.to_json()
        return True, None

    def create_invalid_param_error(
        self,
        param_name: str,
        received: Any,
        valid_values: List[str],
        context: str = ""
    ) -> str:
        return DocsErrorBuilder.invalid_param_value(
            param_name=param_name,
            received_value=received,
            valid_values=valid_values,
            context_description=context
        ).to_json()

    def create_invalid_color_error(self, color_value: Any, param_name: str = "foreground_color") -> str:
        return DocsErrorBuilder.invalid_color_format(color_value=color_value, param_name=param_name).to_json()


_validator: Optional[ValidationManager] = None


def get_validator() -> ValidationManager:
    """Process-wide validator; its rules never change after construction."""
    global _validator
    if _validator is None:
        _validator = ValidationManager()
    return _validator
