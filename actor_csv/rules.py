"""
Fixed conversion rules.

The column set is not configurable: every export carries the same 32 columns
in the same order, whatever the input records contain.
"""

ACTOR_FIELDS = (
    "uuid",
    "ulid",
    "name",
    "names",
    "actorType",
    "actorStatus",
    "actorStatusFromDate",
    "roleName",
    "countryIso2Code",
    "countryName",
    "countryType",
    "dateOfRegistration",
    "eudamedIdentifier",
    "electronicMail",
    "telephone",
    "geographicalAddress",
    "buildingNumber",
    "streetName",
    "postbox",
    "addressComplement",
    "postalZone",
    "cityName",
    "abbreviatedName",
    "abbreviatedNames",
    "latestVersion",
    "versionNumber",
    "associatedToUser",
    "registrationUlid",
    "legislationLinks",
    "selectable",
    "actorValidated",
    "srn",
)

TARGET_ENCODING = "utf-8-sig"  # UTF-8 with BOM
UTF8_BOM = b"\xef\xbb\xbf"
NORMALIZED_DELIMITER = ","
LINE_TERMINATOR = "\n"

INPUT_SUFFIX = ".json"
OUTPUT_SUFFIX = ".csv"

LOG_LEVEL_ENV = "ACTOR_CSV_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
