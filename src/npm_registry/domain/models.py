import re
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)

# "Jane Doe <jane@example.com> (https://example.com)"
PERSON_PATTERN = re.compile(r"^([^<(]*?)\s*(?:<([^>]*)>)?\s*(?:\(([^)]*)\))?\s*$")


class RegistryModel(BaseModel):
    """
    base for registry documents: immutable, unknown keys ignored, null treated as absent.

    scalar fields are strict: `"5"` is not an int and `1` is not a bool.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class RegistryMetadata(RegistryModel):
    """registry-wide stats served from the registry root."""
    db_name: StrictStr = ""
    doc_count: StrictInt = 0
    doc_del_count: StrictInt = 0
    update_seq: StrictInt = 0
    purge_seq: StrictInt = 0
    compact_running: StrictBool = False
    disk_size: StrictInt = 0
    data_size: StrictInt = 0
    instance_start_time: StrictStr = ""
    disk_format_version: StrictInt = 0
    committed_update_seq: StrictInt = 0


class Person(RegistryModel):
    name: StrictStr = ""
    email: StrictStr = ""
    url: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        # package.json allows the "Name <email> (url)" shorthand
        if isinstance(data, str):
            match = PERSON_PATTERN.match(data.strip())
            if not match:
                return {"name": data}
            name, email, url = match.groups()
            return {"name": name or "", "email": email or "", "url": url or ""}
        return data


class Repository(RegistryModel):
    type: StrictStr = ""
    url: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"url": data}
        return data


class Dist(RegistryModel):
    shasum: StrictStr = ""
    tarball: StrictStr = ""


class PackageTime(RegistryModel):
    created: StrictStr = ""
    modified: StrictStr = ""


class VersionRecord(RegistryModel):
    """one published version of a package."""
    name: StrictStr = ""
    version: StrictStr = ""
    homepage: StrictStr = ""
    repository: Repository = Field(default_factory=Repository)
    # range values are usually strings but the registry does not guarantee it
    dependencies: Dict[str, Any] = Field(default_factory=dict)
    dev_dependencies: Dict[str, Any] = Field(default_factory=dict, alias="devDependencies")
    scripts: Dict[str, Any] = Field(default_factory=dict)
    author: Person = Field(default_factory=Person)
    license: StrictStr = ""
    readme: StrictStr = ""
    readme_filename: StrictStr = Field(default="", alias="readmeFilename")
    id: StrictStr = Field(default="", alias="_id")
    description: StrictStr = ""
    dist: Dist = Field(default_factory=Dist)
    npm_version: StrictStr = Field(default="", alias="_npmVersion")
    npm_user: Optional[Any] = Field(default=None, alias="_npmUser")
    maintainers: List[Dict[str, Any]] = Field(default_factory=list)

    @field_validator("license", mode="before")
    @classmethod
    def legacy_license(cls, value: Any) -> Any:
        # old manifests use {"type": "MIT", "url": "..."}
        if isinstance(value, dict):
            return value.get("type", "")
        return value


class Package(RegistryModel):
    """
    a package document as returned by the registry.

    the single-version endpoint is decoded into this shape as well, in which
    case only the fields present at the top level are populated.
    """
    id: StrictStr = Field(default="", alias="_id")
    rev: StrictStr = Field(default="", alias="_rev")
    name: StrictStr = ""
    description: StrictStr = ""
    dist_tags: Dict[str, StrictStr] = Field(default_factory=dict, alias="dist-tags")
    versions: Dict[str, VersionRecord] = Field(default_factory=dict)
    time: PackageTime = Field(default_factory=PackageTime)
    author: Person = Field(default_factory=Person)
    repository: Repository = Field(default_factory=Repository)
    readme: StrictStr = ""

    @property
    def latest(self) -> Optional[VersionRecord]:
        """the version record the `latest` dist-tag points at, if any."""
        tag = self.dist_tags.get("latest")
        if tag is None:
            return None
        return self.versions.get(tag)
