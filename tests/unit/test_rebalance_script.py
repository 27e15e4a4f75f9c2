"""
Unit tests for the rebalance command-line script.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from rebalancer.core.models.policy import DEFAULT_POLICY
from rebalancer.core.models.portfolio import Portfolio, PortfolioLine
from scripts import rebalance_portfolio


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the script from replacing the test session's log sinks."""
    monkeypatch.setattr(rebalance_portfolio, "setup_logging", lambda debug=False: None)


@pytest.fixture
def portfolio_file(tmp_path: Path) -> Path:
    file_path = tmp_path / "portfolio.csv"
    file_path.write_text("Fund,Balance,Target\nA,250,0.5\nB,100,0.2\nC,200,0.3\n", encoding="utf-8")
    return file_path


class TestRebalanceScript:
    """Test running the script end to end."""

    def test_should_print_results_csv(
        self, portfolio_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test the plan is printed with Buy/Sell actions."""
        exit_code = rebalance_portfolio.main(
            [
                "--portfolio",
                str(portfolio_file),
                "--contribution",
                "100",
                "--allow-selling",
                "--include-action",
            ]
        )

        output = capsys.readouterr().out.strip().split("\n")
        assert exit_code == 0
        assert output[0] == "Fund,Dollars_to_Add,Action,Allocation_%,Target_Allocation_%,Difference_%"
        assert output[1] == "A,75.00,Buy,75.00,50.00,25.00"
        assert output[3] == "C,5.00,Sell,-5.00,30.00,-35.00"

    def test_should_write_output_file(self, portfolio_file: Path, tmp_path: Path) -> None:
        """Test --output writes the plan instead of printing it."""
        output_path = tmp_path / "plan.csv"

        exit_code = rebalance_portfolio.main(
            [
                "--portfolio",
                str(portfolio_file),
                "--contribution",
                "1000",
                "--output",
                str(output_path),
            ]
        )

        assert exit_code == 0
        lines = output_path.read_text(encoding="utf-8").split("\n")
        assert lines[0] == "Fund,Dollars_to_Add,Allocation_%,Target_Allocation_%,Difference_%"
        assert len(lines) == 4

    def test_should_print_metrics_table(
        self, portfolio_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test --metrics prints the allocation table before the plan."""
        exit_code = rebalance_portfolio.main(
            ["--portfolio", str(portfolio_file), "--contribution", "1000", "--metrics"]
        )

        output = capsys.readouterr().out
        assert exit_code == 0
        assert "current_allocation_pct" in output
        assert "overweight" in output

    def test_should_fail_when_selling_required(self, portfolio_file: Path) -> None:
        """Test the selling gate produces a non-zero exit code."""
        exit_code = rebalance_portfolio.main(
            ["--portfolio", str(portfolio_file), "--contribution", "100"]
        )
        assert exit_code == 1

    @pytest.mark.parametrize("contribution", ["0", "-5", "abc"])
    def test_should_fail_for_invalid_contribution(
        self, portfolio_file: Path, contribution: str
    ) -> None:
        """Test invalid contributions produce a non-zero exit code."""
        exit_code = rebalance_portfolio.main(
            ["--portfolio", str(portfolio_file), "--contribution", contribution]
        )
        assert exit_code == 1

    def test_should_fail_for_missing_file(self, tmp_path: Path) -> None:
        """Test missing input files are reported, not raised."""
        exit_code = rebalance_portfolio.main(
            ["--portfolio", str(tmp_path / "absent.csv"), "--contribution", "100"]
        )
        assert exit_code == 1

    def test_should_reject_invalid_policy(self, portfolio_file: Path) -> None:
        """Test a negative tolerance is a configuration error."""
        exit_code = rebalance_portfolio.main(
            [
                "--portfolio",
                str(portfolio_file),
                "--contribution",
                "100",
                "--target-tolerance",
                "-1",
            ]
        )
        assert exit_code == 1


class TestPrintMetrics:
    """Test the metrics report."""

    @patch("scripts.rebalance_portfolio.logger")
    def test_should_log_funds_needing_attention(
        self, mock_logger: Mock, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test drifted funds are listed from most overweight down."""
        portfolio = Portfolio.from_lines(
            [
                PortfolioLine("A", 250.0, 0.5),
                PortfolioLine("B", 100.0, 0.2),
                PortfolioLine("C", 200.0, 0.3),
            ]
        )

        rebalance_portfolio.print_metrics(portfolio, DEFAULT_POLICY)

        messages = [call[0][0] for call in mock_logger.info.call_args_list]
        assert messages[1] == "C is overweight by +6.36 points"
        assert messages[2] == "B is underweight by -1.82 points"
        assert messages[3] == "A is underweight by -4.55 points"
        mock_logger.warning.assert_not_called()
        assert "fund" in capsys.readouterr().out

    @patch("scripts.rebalance_portfolio.logger")
    def test_should_warn_when_targets_do_not_total_100(self, mock_logger: Mock) -> None:
        """Test the target total is reported when it misses 100%."""
        portfolio = Portfolio.from_lines(
            [PortfolioLine("A", 500.0, 0.5), PortfolioLine("B", 500.0, 0.6)]
        )

        rebalance_portfolio.print_metrics(portfolio, DEFAULT_POLICY)

        mock_logger.warning.assert_called_once_with("Target allocations total 110.00%, not 100%")
