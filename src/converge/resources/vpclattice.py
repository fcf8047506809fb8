"""VPC Lattice resource types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from ..context import Context
from ..resource import Computed, ForceNew, ResourceType, WaitSpec, resource

STATUS_CREATE_IN_PROGRESS = "CREATE_IN_PROGRESS"
STATUS_ACTIVE = "ACTIVE"
STATUS_DELETE_IN_PROGRESS = "DELETE_IN_PROGRESS"


class ServiceNetworkServiceAssociationModel(BaseModel):
    """Associates a VPC Lattice service with a service network."""

    model_config = ConfigDict(extra="forbid")

    service_identifier: Annotated[str, ForceNew()] = Field(min_length=1)
    service_network_identifier: Annotated[str, ForceNew()] = Field(min_length=1)
    tags: dict[str, str] = Field(default_factory=dict)

    arn: Annotated[str | None, Computed()] = None
    id: Annotated[str | None, Computed()] = None
    status: Annotated[str | None, Computed()] = None
    dns_entry: Annotated[dict[str, str] | None, Computed()] = None


@resource("aws_vpclattice_service_network_service_association")
class ServiceNetworkServiceAssociation(ResourceType[ServiceNetworkServiceAssociationModel]):
    display_name = "Service Network Service Association"
    model = ServiceNetworkServiceAssociationModel

    create_waiter = WaitSpec(
        pending=(STATUS_CREATE_IN_PROGRESS,),
        target=(STATUS_ACTIVE,),
        continuous_target_occurence=2,
        not_found_checks=20,
    )
    update_waiter = WaitSpec(
        pending=(STATUS_CREATE_IN_PROGRESS,),
        target=(STATUS_ACTIVE,),
        continuous_target_occurence=2,
        not_found_checks=20,
    )
    delete_waiter = WaitSpec(
        pending=(STATUS_DELETE_IN_PROGRESS, STATUS_ACTIVE),
        target=(),
        not_found_checks=1,
    )

    def create_request(
        self,
        desired: ServiceNetworkServiceAssociationModel,
        ctx: Context[Any],
    ) -> dict[str, Any]:
        return {
            "serviceIdentifier": desired.service_identifier,
            "serviceNetworkIdentifier": desired.service_network_identifier,
        }

    def update_request(self, changes: Mapping[str, Any]) -> dict[str, Any]:
        # only tags can change in place
        return {"tags": changes["tags"]} if "tags" in changes else {}

    def flatten(
        self,
        identifier: str,
        response: Mapping[str, Any],
        ctx: Context[Any],
    ) -> dict[str, Any]:
        return {
            "arn": response.get("arn") or self.arn(response.get("id", identifier), ctx),
            "id": response.get("id"),
            "status": response.get("status"),
            "service_identifier": response.get("serviceId"),
            "service_network_identifier": response.get("serviceNetworkId"),
            "dns_entry": response.get("dnsEntry"),
        }

    @staticmethod
    def arn(association_id: str, ctx: Context[Any]) -> str:
        """Build the association ARN from the provider location."""
        provider = ctx.config.provider
        return (
            f"arn:{provider.partition}:vpclattice:{provider.region}:{provider.account_id}:"
            f"servicenetworkserviceassociation/{association_id}"
        )
