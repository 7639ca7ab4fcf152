"""
Main Pipeline Orchestrator

Runs the mtcars analysis end to end with verification checkpoints:
Stage 1 load + recode, Stage 2 grouped statistics + correlation,
Stage 3 charts, Stage 4 regression, hypothesis tests and export.

Usage:
    mtcars-eda
    mtcars-eda --output-dir results --verbose
    mtcars-eda --config config/pipeline_config.yaml
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

import pandas as pd

from .config import get_config, Config
from .utils.logging_utils import configure_logging, get_logger
from .utils.file_utils import save_json

from .stage1 import Loader, Recoder
from .stage2 import Aggregator, Correlator, upper_triangle
from .stage3 import Visualizer, ChartSpec, DEFAULT_CHARTS
from .stage4 import Modeler, LinearModel, HypothesisTester, HypothesisTestResult, Exporter

from .verifiers import SummaryChecker, MetricsChecker

logger = get_logger(__name__)


def print_section(title: str, body: Any) -> None:
    """Print one console report section."""
    print(f"\n{title}:")
    print(body)


class Pipeline:
    """
    Main pipeline orchestrator.

    Example:
        >>> pipeline = Pipeline()
        >>> results = pipeline.run_full()
        >>> results['model'].r_squared
        0.8267854
    """

    def __init__(self, config: Optional[Config] = None, config_file: Optional[str] = None):
        """
        Initialize the pipeline.

        Args:
            config: Ready Config instance (takes precedence)
            config_file: Path to config file (optional)
        """
        self.config = config if config is not None else get_config(config_file)

        configure_logging(self.config.get_stage_config('logging'))

        self.output_dir = Path(self.config.get('output.dir', 'outputs'))
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.summary_checker = SummaryChecker(config=self.config.get_verification_config('v2'))
        self.metrics_checker = MetricsChecker(config=self.config.get_verification_config('v4'))

        logger.info("=" * 80)
        logger.info("mtcars Analysis Pipeline Initialized")
        logger.info(f"  Output dir: {self.output_dir}")
        logger.info("=" * 80)

    def run_full(self) -> Dict[str, Any]:
        """
        Run every stage in order and return all intermediate results.

        Returns:
            Dict with the recoded and augmented tables, group summary,
            correlation matrix, fitted model, test results, file paths and
            verification reports
        """
        logger.info("Running FULL PIPELINE")
        verification = {}

        logger.info("STAGE 1: Load and recode")
        df = self.run_stage1()

        logger.info("STAGE 2: Grouped statistics and correlation")
        summary, matrix = self.run_stage2(df)

        logger.info("VERIFICATION V2: Summary Check")
        group_by = self.config.get('aggregator.group_by', 'cyl')
        verification['group_summary'] = self.summary_checker.verify_group_summary(summary, df, group_by)
        verification['correlation'] = self.summary_checker.verify_correlation(matrix)

        logger.info("STAGE 4: Linear model")
        model, augmented = self.run_model(df)

        logger.info("STAGE 3: Charts")
        plots = self.run_stage3(augmented, summary, matrix)

        logger.info("STAGE 4: Hypothesis tests and export")
        tests = self.run_tests(augmented)
        export_path = self.run_export(augmented)

        logger.info("VERIFICATION V4: Metrics Check")
        verification['model'] = self.metrics_checker.verify_model(model, augmented)
        verification['tests'] = self.metrics_checker.verify_tests(tests)
        verification['export'] = self.metrics_checker.verify_export(export_path, augmented)

        failed = [name for name, report in verification.items() if report['status'] == 'fail']
        if failed:
            logger.error(f"Verification failed: {failed}")

        results = {
            'table': augmented,
            'summary': summary,
            'correlation': matrix,
            'model': model,
            'tests': tests,
            'plots': plots,
            'export': export_path,
            'verification': verification,
        }

        if self.config.get('output.save_results', False):
            results['results_file'] = self._save_results(results)

        print("\nData analysis complete. All plots have been saved and outputs printed to console.")
        logger.info("PIPELINE COMPLETE")

        return results

    def run_stage1(self) -> pd.DataFrame:
        """Run Stage 1: load, describe and recode the dataset."""
        loader = Loader(config=self.config.get_stage_config('loader'))
        raw = loader.load()

        summary, structure = loader.describe(raw)
        print_section("Summary of mtcars dataset", summary.round(3).to_string())
        print_section("Structure of mtcars dataset",
                      f"{len(raw)} obs. of {len(raw.columns)} variables\n"
                      + structure.to_string(index=False))

        recoder = Recoder.from_config(self.config.get_stage_config('recoder'))
        df = recoder.apply(raw)

        logger.info(f"✓ Stage 1 complete: {len(df)} rows, {len(df.columns)} columns")

        return df

    def run_stage2(self, df: pd.DataFrame) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Run Stage 2: grouped summary and correlation matrix."""
        aggregator = Aggregator(config=self.config.get_stage_config('aggregator'))
        summary = aggregator.summarize(df)
        print_section(
            f"Descriptive Statistics by {aggregator.config['group_by']}",
            summary.to_string(index=False)
        )

        correlator = Correlator(config=self.config.get_stage_config('correlator'))
        matrix = correlator.correlate(df)
        print_section("Correlation Matrix", upper_triangle(matrix).to_string(na_rep=''))

        logger.info(f"✓ Stage 2 complete: {len(summary)} groups, {len(matrix)} numeric columns")

        return summary, matrix

    def run_stage3(
        self,
        df: pd.DataFrame,
        summary: pd.DataFrame,
        matrix: Optional[pd.DataFrame] = None
    ) -> List[Path]:
        """Run Stage 3: render every configured chart."""
        viz_config = self.config.get_stage_config('visualizer')
        visualizer = Visualizer(
            output_dir=self.output_dir,
            config={k: v for k, v in viz_config.items() if k != 'charts'}
        )

        chart_dicts = viz_config.get('charts')
        specs = DEFAULT_CHARTS if chart_dicts is None else [ChartSpec.from_dict(c) for c in chart_dicts]

        plots = visualizer.render_all(specs, {'table': df, 'summary': summary})

        if matrix is not None and visualizer.config['heatmap']['enabled']:
            plots.append(visualizer.plot_correlation_heatmap(matrix))

        logger.info(f"✓ Stage 3 complete: {len(plots)} plots")

        return plots

    def run_model(self, df: pd.DataFrame) -> Tuple[LinearModel, pd.DataFrame]:
        """Fit the linear model and append its predictions."""
        modeler = Modeler(config=self.config.get_stage_config('modeler'))
        model = modeler.fit(df)
        augmented = modeler.add_predictions(df, model)

        print_section("Linear Regression Model Summary", model.summary())

        return model, augmented

    def run_tests(self, df: pd.DataFrame) -> Dict[str, HypothesisTestResult]:
        """Run the two hypothesis tests."""
        tester = HypothesisTester(config=self.config.get_stage_config('hypothesis'))
        tests = tester.run(df)

        t_config = tester.config['t_test']
        cor_config = tester.config['correlation_test']
        print_section(
            f"T-test Result Comparing {t_config['value']} by {t_config['group']}",
            tests['t_test'].summary()
        )
        print_section(
            f"Correlation Test between {cor_config['x']} and {cor_config['y']}",
            tests['correlation_test'].summary()
        )

        return tests

    def run_export(self, df: pd.DataFrame) -> Path:
        """Export the augmented table."""
        exporter = Exporter(output_dir=self.output_dir, config=self.config.get_stage_config('exporter'))
        path = exporter.export(df)

        print(f"\nEnhanced dataset saved as '{path.name}'.")

        return path

    def _save_results(self, results: Dict[str, Any]) -> Path:
        payload = {
            'group_summary': results['summary'].to_dict('records'),
            'correlation': results['correlation'].to_dict(),
            'model': results['model'].to_dict(),
            'tests': {name: result.to_dict() for name, result in results['tests'].items()},
            'plots': [str(p) for p in results['plots']],
            'export': str(results['export']),
            'verification': {name: report['status'] for name, report in results['verification'].items()},
        }
        filename = self.config.get('output.results_file', 'analysis_results.json')
        return save_json(payload, self.output_dir / filename)


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point for the pipeline.

    Usage:
        mtcars-eda
        mtcars-eda --output-dir results
        mtcars-eda --config config/pipeline_config.yaml --verbose
    """
    parser = argparse.ArgumentParser(
        description="Exploratory analysis of the mtcars dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--config',
        help='Path to config file (default: config/pipeline_config.yaml)'
    )

    parser.add_argument(
        '--output-dir',
        help='Directory for charts and the exported CSV (default: outputs)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    config = Config(args.config)
    if args.output_dir:
        config.set('output.dir', args.output_dir)
    if args.verbose:
        config.set('logging.level', 'DEBUG')

    try:
        Pipeline(config=config).run_full()
    except (ValueError, OSError) as e:
        logger.error(f"Pipeline failed: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
