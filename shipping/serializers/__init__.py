from .area_serializers import AreaSerializer, AreaWriteSerializer, PublicAreaSerializer
from .county_serializers import CountySerializer, CountyWriteSerializer, PublicCountySerializer
from .shipping_serializers import (
    CountyDeactivationSerializer,
    ShippingErrorResponseSerializer,
    ShippingQuoteRequestSerializer,
    ShippingQuoteSerializer,
    ShippingStatsSerializer,
)

__all__ = [
    # County
    "PublicCountySerializer",
    "CountySerializer",
    "CountyWriteSerializer",
    # Area
    "PublicAreaSerializer",
    "AreaSerializer",
    "AreaWriteSerializer",
    # Shipping
    "ShippingQuoteRequestSerializer",
    "ShippingQuoteSerializer",
    "ShippingStatsSerializer",
    "CountyDeactivationSerializer",
    "ShippingErrorResponseSerializer",
]
