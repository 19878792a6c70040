import enum


class Subnet(str, enum.Enum):
    WALRUS = "walrus"
    ARWEAVE = "arweave"
    GEO_FILECOIN = "geo-filecoin"
