"""
Unit Tests for the Stride CLI
Tests for: argument parsing, report rendering, exit codes
"""
import pytest

from cli.main import create_parser, main


MIS_PAGE = (
    "<html><body><table>"
    "<tr><td>View</td><td>2CS301</td><td>Data Structures</td><td>DS</td><td>L</td>"
    "<td>30</td><td>10</td><td>40</td><td>75</td></tr>"
    "<tr><td>View</td><td>2CS302</td><td>Discrete Maths</td><td>DM</td><td>L</td>"
    "<td>48</td><td>2</td><td>50</td><td>96</td></tr>"
    "</table></body></html>"
)


class TestParser:
    """Test argument parsing"""

    def test_defaults(self):
        args = create_parser().parse_args(["recommend", "30", "40"])
        assert args.target == 75
        assert args.kind == "Lecture"

    @pytest.mark.parametrize("target", ["0", "101", "eighty"])
    def test_target_out_of_range(self, target):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["recommend", "30", "40", "--target", target])

    def test_bad_date(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["semester", "24bce167@nirmauni.ac.in", "--on", "15-11-2025"])


class TestReportCommand:
    """Test stride report"""

    def test_html_report(self, tmp_path, capsys):
        report = tmp_path / "attendance.html"
        report.write_text(MIS_PAGE, encoding="utf-8")

        assert main(["report", str(report), "--target", "80"]) == 0

        output = capsys.readouterr().out
        assert "Critical (1)" in output
        assert "Safe to bunk (1)" in output
        assert "2CS301" in output
        assert "2CS302" in output

    def test_no_rows(self, tmp_path, capsys):
        report = tmp_path / "attendance.html"
        report.write_text("<html><p>Session expired</p></html>", encoding="utf-8")

        assert main(["report", str(report)]) == 0
        assert "No attendance data found" in capsys.readouterr().out

    def test_unreadable_pdf(self, tmp_path, capsys):
        report = tmp_path / "attendance.pdf"
        report.write_bytes(b"not a pdf at all")

        assert main(["report", str(report)]) == 1
        assert "Failed to parse" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["report", str(tmp_path / "missing.pdf")]) == 1
        assert "Cannot read" in capsys.readouterr().out


class TestOtherCommands:
    """Test recommend, grade and semester"""

    def test_recommend(self, capsys):
        assert main(["recommend", "40", "50", "--target", "85"]) == 0

        output = capsys.readouterr().out
        assert "80%" in output
        assert "Attend next 17 Lectures to reach 85%." in output

    def test_recommend_negative(self, capsys):
        assert main(["recommend", "-1", "50"]) == 1

    def test_grade(self, capsys):
        assert main(["grade", "90.99"]) == 0
        assert "A+" in capsys.readouterr().out

    def test_semester(self, capsys):
        assert main(["semester", "24bce167@nirmauni.ac.in", "--on", "2025-11-15"]) == 0

        output = capsys.readouterr().out
        assert "Computer Science Engineering" in output
        assert "2025-26" in output
        assert "3 / 4" in output

    def test_semester_unknown_email(self, capsys):
        assert main(["semester", "someone@example.com"]) == 1

    def test_no_command(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()
