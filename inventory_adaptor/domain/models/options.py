from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Largest page the platform serves
MAX_PAGE_SIZE = 250


class GetOptions(BaseModel):
    """
    Query options accepted when fetching a single resource.

    Attributes:
        fields: Restricts the response to the named fields.
    """

    model_config = ConfigDict(extra="forbid")

    fields: Optional[List[str]] = None

    def to_params(self) -> Dict[str, str]:
        """
        Renders the options as query parameters.

        Only options that were set are sent; list values are comma-joined
        and empty lists are left out.

        Returns:
            Dict[str, str]: Query parameters for the request
        """
        params: Dict[str, str] = {}
        for name, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, list):
                if not value:
                    continue
                params[name] = ",".join(str(v) for v in value)
            else:
                params[name] = str(value)
        return params


class ListOptions(GetOptions):
    """
    Query options accepted when listing a resource.

    Attributes:
        ids: Only return resources with these ids.
        limit: Page size, 1 to 250. The platform defaults to 50.
        since_id: Only return resources with an id greater than this one.
        page_info: Opaque cursor taken from a previous page's Link header.
            The platform rejects most filters alongside it; only ``limit``
            and ``fields`` may accompany a cursor.
    """

    ids: Optional[List[int]] = None
    limit: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE_SIZE)
    since_id: Optional[int] = None
    page_info: Optional[str] = None
