"""
Dashboard Read Models.

Shapes returned by the aggregation endpoints. Field names are snake_case;
aliases are the camelCase keys the dashboard consumes, so serialize with
``model_dump(by_alias=True)``.

Exports:
    NamedCount: One labelled bucket
    DashboardKpis: Headline counters
    DashboardCharts: Gender, age and location breakdowns
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class NamedCount(BaseModel):
    """A chart bucket: label plus count."""

    name: str
    count: int = Field(default=0, ge=0)


class DashboardKpis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_households: int = Field(default=0, ge=0, alias="totalHouseholds")
    total_members: int = Field(default=0, ge=0, alias="totalMembers")
    active_tithers: int = Field(default=0, ge=0, alias="activeTithers")
    engaged_servers: int = Field(default=0, ge=0, alias="engagedServers")


class DashboardCharts(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    gender_data: List[NamedCount] = Field(default_factory=list, alias="genderData")
    age_data: List[NamedCount] = Field(default_factory=list, alias="ageData")
    location_data: List[NamedCount] = Field(default_factory=list, alias="locationData")
