"""GraphQL access: the gateway and the documents it sends."""

from manager_portal.graphql.gateway import (
    FileUpload,
    GraphQLErrorDetail,
    GraphQLFailure,
    GraphQLGateway,
    GraphQLResult,
    GraphQLSuccess,
    operation_name_of,
)

__all__ = [
    "FileUpload",
    "GraphQLErrorDetail",
    "GraphQLFailure",
    "GraphQLGateway",
    "GraphQLResult",
    "GraphQLSuccess",
    "operation_name_of",
]
