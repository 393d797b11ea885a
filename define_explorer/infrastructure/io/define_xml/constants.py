ODM_NS = "http://www.cdisc.org/ns/odm/v1.3"
DEF_NS_V20 = "http://www.cdisc.org/ns/def/v2.0"
DEF_NS_V21 = "http://www.cdisc.org/ns/def/v2.1"
ARM_NS = "http://www.cdisc.org/ns/arm/v1.0"
XLINK_NS = "http://www.w3.org/1999/xlink"
XML_NS = "http://www.w3.org/XML/1998/namespace"
DEF_PREFIX = "def"
ARM_PREFIX = "arm"
AFFIRMATIVE = "Yes"
DEFAULT_COMPARATOR = "EQ"
DEFAULT_SOFT_HARD = "Soft"
RESULT_DISPLAY = "ResultDisplay"
