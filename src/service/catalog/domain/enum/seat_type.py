from enum import StrEnum


class SeatType(StrEnum):
    REGULAR = 'REGULAR'
    PREMIUM = 'PREMIUM'
    VIP = 'VIP'
    RECLINER = 'RECLINER'
    LOVESEAT = 'LOVESEAT'
    ACCESSIBLE = 'ACCESSIBLE'
    COMPANION = 'COMPANION'
    D_BOX = 'D-BOX'
    HAPTIC = 'HAPTIC'
    EXTRA_LEGROOM = 'EXTRA-LEGROOM'
    BALCONY = 'BALCONY'
    CUDDLE_COUCH = 'CUDDLE COUCH'
    POD = 'POD'
    BOX = 'BOX'
    BEAN_BAG = 'BEAN BAG'
    FLOOR = 'FLOOR'
    BUDGET = 'BUDGET'
    STANDING_SPACE = 'STANDING SPACE'


class SeatLayoutType(StrEnum):
    """Grid slot kind on a screen's seat layout; only SEAT slots are bookable."""

    SEAT = 'SEAT'
    AISLE = 'AISLE'
    STAIR = 'STAIR'
