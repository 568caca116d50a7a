import pytest

from poolstat.zpool.core.exceptions.parse_exceptions import SectionNotFoundError
from poolstat.zpool.parsers.field_extractor import FieldExtractor, extract_field
from tests.fixtures.zpool_outputs import (
    SCENARIO_REPORT,
    ZEEPOOL_REPORT,
    DEGRADED_TAB_REPORT,
    SPECIAL_VDEVS_REPORT,
)


class TestFieldExtractor:

    def test_single_line_fields(self):
        fields = FieldExtractor(ZEEPOOL_REPORT)

        assert fields.extract("pool") == "zeepool"
        assert fields.extract("state") == "DEGRADED"
        assert fields.extract("see") == "http://www.sun.com/msg/ZFS-8000-2Q"
        assert fields.extract("scrub") == "none requested"
        assert fields.extract("errors") == "No known data errors"

    def test_wrapped_value_is_joined(self):
        status = extract_field(ZEEPOOL_REPORT, "status")

        assert status == (
            "One or more devices could not be opened.  Sufficient replicas exist for "
            "the pool to continue functioning in a degraded state."
        )

    def test_tab_indented_continuation(self):
        fields = FieldExtractor(DEGRADED_TAB_REPORT)

        assert fields.extract("status") == (
            "One or more devices has been removed by the administrator. "
            "Sufficient replicas exist for the pool to continue functioning in a "
            "degraded state."
        )
        assert fields.extract("action") == (
            "Online the device using 'zpool online' or replace the device with "
            "'zpool replace'."
        )

    def test_config_keeps_relative_indentation(self):
        config = extract_field(SCENARIO_REPORT, "config", keep_newlines=True)
        lines = config.split("\n")

        assert lines[0] == ""
        assert lines[1].strip().startswith("NAME")
        assert lines[2] == "  zeepool       ONLINE       0     0     0"
        assert lines[3] == "    mirror-0    ONLINE       0     0     0"
        assert lines[6] == "        c2t3d0  ONLINE       0     0     0  90K resilvered"
        assert lines[-1] == "    c2t3d0      INUSE     currently in use"

    def test_interior_blank_lines_kept_trailing_dropped(self):
        config = FieldExtractor(ZEEPOOL_REPORT).extract("config", keep_newlines=True)
        lines = config.split("\n")

        assert lines[0] == "" and lines[1] == ""
        assert lines[2].strip().startswith("NAME")
        assert "errors" not in config
        assert lines[-1].strip() == "c2t3d0      INUSE     currently in use"

    def test_indented_section_header(self):
        spares = extract_field(SCENARIO_REPORT, "spares", keep_newlines=True)

        assert spares == "\n c2t3d0      INUSE     currently in use"

    def test_section_ends_at_shallower_line(self):
        spares = FieldExtractor(SPECIAL_VDEVS_REPORT).extract("spares", keep_newlines=True)

        names = [line.split()[0] for line in spares.splitlines() if line.strip()]
        assert names == ["sdf", "sdg"]

    def test_header_is_never_a_continuation(self):
        report = "pool: tank\n     state: ONLINE\n"

        assert extract_field(report, "pool") == "tank"
        assert extract_field(report, "state") == "ONLINE"

    def test_deeply_indented_label_is_continuation_only(self):
        fields = FieldExtractor("status: Some text\n        action: keep going\n")

        assert fields.extract("status") == "Some text action: keep going"
        assert not fields.has("action")
        assert fields.get("action") == ""

    def test_missing_section_raises(self):
        with pytest.raises(SectionNotFoundError) as exc_info:
            extract_field(SCENARIO_REPORT, "status")

        assert exc_info.value.key == "status"
        assert exc_info.value.to_dict()["error_code"] == "SECTION_NOT_FOUND"

    def test_get_and_has(self):
        fields = FieldExtractor(SCENARIO_REPORT)

        assert fields.has("pool")
        assert not fields.has("action")
        assert fields.get("action") == ""
        assert fields.get("action", default="n/a") == "n/a"
        assert fields.get("state") == "DEGRADED"

    def test_empty_report(self):
        assert not FieldExtractor("").has("pool")
        with pytest.raises(SectionNotFoundError):
            extract_field("", "pool")
