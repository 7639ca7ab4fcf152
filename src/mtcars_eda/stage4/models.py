"""
Model Fitting Module - Stage 4

Ordinary least squares regression of one numeric target on numeric
predictors, with the usual coefficient inference:
- Standard errors, t values and p-values per coefficient
- Residual standard error, R² and adjusted R²
- Overall F-statistic
"""

from dataclasses import dataclass
from typing import Dict, Any, List, Optional

import numpy as np
import pandas as pd
from scipy import stats
from sklearn.linear_model import LinearRegression

from ..utils.logging_utils import get_logger
from ..utils.stats_utils import require_columns

logger = get_logger(__name__)

INTERCEPT = '(Intercept)'


@dataclass
class LinearModel:
    """
    A fitted linear model.

    ``coefficients`` is indexed by ``(Intercept)`` followed by the predictor
    names in fitting order; ``std_errors``, ``t_values`` and ``p_values`` share
    that index.
    """
    target: str
    predictors: List[str]
    coefficients: pd.Series
    std_errors: pd.Series
    t_values: pd.Series
    p_values: pd.Series
    n_obs: int
    df_residual: int
    residual_std_error: float
    r_squared: float
    adj_r_squared: float
    f_statistic: float
    f_p_value: float
    residuals: pd.Series

    @property
    def intercept(self) -> float:
        return float(self.coefficients[INTERCEPT])

    @property
    def slopes(self) -> pd.Series:
        return self.coefficients[self.predictors]

    def predict(self, df: pd.DataFrame) -> pd.Series:
        """Predict the target for every row of ``df``."""
        require_columns(df, self.predictors)
        values = self.intercept + df[self.predictors].to_numpy(dtype=float) @ self.slopes.to_numpy()
        return pd.Series(values, index=df.index, name=f"predicted_{self.target}")

    def coefficient_table(self) -> pd.DataFrame:
        return pd.DataFrame({
            'Estimate': self.coefficients,
            'Std. Error': self.std_errors,
            't value': self.t_values,
            'Pr(>|t|)': self.p_values,
        })

    def formula(self) -> str:
        return f"{self.target} ~ {' + '.join(self.predictors)}"

    def summary(self) -> str:
        """Human-readable model summary."""
        quantiles = self.residuals.quantile([0, 0.25, 0.5, 0.75, 1.0])
        residual_line = pd.DataFrame(
            [quantiles.to_numpy()],
            columns=['Min', '1Q', 'Median', '3Q', 'Max']
        ).round(4).to_string(index=False)

        table = self.coefficient_table().to_string(
            float_format=lambda v: f"{v:.6g}"
        )

        lines = [
            f"Formula: {self.formula()}",
            "",
            "Residuals:",
            residual_line,
            "",
            "Coefficients:",
            table,
            "",
            f"Residual standard error: {self.residual_std_error:.4g} on {self.df_residual} degrees of freedom",
            f"Multiple R-squared: {self.r_squared:.4f},\tAdjusted R-squared: {self.adj_r_squared:.4f}",
            f"F-statistic: {self.f_statistic:.4g} on {len(self.predictors)} and {self.df_residual} DF,"
            f"  p-value: {self.f_p_value:.4g}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'formula': self.formula(),
            'coefficients': self.coefficients.to_dict(),
            'std_errors': self.std_errors.to_dict(),
            'p_values': self.p_values.to_dict(),
            'n_obs': self.n_obs,
            'r_squared': self.r_squared,
            'adj_r_squared': self.adj_r_squared,
            'residual_std_error': self.residual_std_error,
            'f_statistic': self.f_statistic,
            'f_p_value': self.f_p_value,
        }


def fit_linear_model(df: pd.DataFrame, target: str, predictors: List[str]) -> LinearModel:
    """
    Fit ``target ~ predictors`` by ordinary least squares.

    Args:
        df: Table holding the target and predictor columns
        target: Numeric target column
        predictors: Numeric predictor columns, in coefficient order

    Returns:
        Fitted LinearModel

    Raises:
        ValueError: If the design matrix is rank-deficient or there are not
            more rows than coefficients

    Example:
        >>> model = fit_linear_model(df, 'mpg', ['wt', 'hp'])
        >>> round(model.intercept, 3)
        37.227
    """
    if not predictors:
        raise ValueError("At least one predictor is required")

    require_columns(df, [target] + list(predictors))

    X = df[predictors].astype(float)
    y = df[target].astype(float)
    n_obs, n_pred = X.shape
    n_coef = n_pred + 1

    if n_obs <= n_coef:
        raise ValueError(
            f"Need more rows than coefficients: {n_obs} rows for {n_coef} coefficients"
        )

    design = np.column_stack([np.ones(n_obs), X.to_numpy()])
    rank = np.linalg.matrix_rank(design)
    if rank < n_coef:
        raise ValueError(
            f"Predictor matrix is rank-deficient (rank {rank} < {n_coef}); "
            f"predictors {predictors} are collinear"
        )

    reg = LinearRegression().fit(X, y)

    index = [INTERCEPT] + list(predictors)
    coefficients = pd.Series(np.r_[reg.intercept_, reg.coef_], index=index)

    fitted = reg.predict(X)
    residuals = pd.Series(y.to_numpy() - fitted, index=df.index, name='residual')

    df_residual = n_obs - n_coef
    rss = float(np.sum(residuals ** 2))
    tss = float(np.sum((y - y.mean()) ** 2))
    sigma2 = rss / df_residual

    covariance = sigma2 * np.linalg.inv(design.T @ design)
    std_errors = pd.Series(np.sqrt(np.diag(covariance)), index=index)
    t_values = coefficients / std_errors
    p_values = pd.Series(2 * stats.t.sf(np.abs(t_values), df_residual), index=index)

    r_squared = 1 - rss / tss
    adj_r_squared = 1 - (1 - r_squared) * (n_obs - 1) / df_residual
    f_statistic = ((tss - rss) / n_pred) / sigma2
    f_p_value = float(stats.f.sf(f_statistic, n_pred, df_residual))

    model = LinearModel(
        target=target,
        predictors=list(predictors),
        coefficients=coefficients,
        std_errors=std_errors,
        t_values=t_values,
        p_values=p_values,
        n_obs=n_obs,
        df_residual=df_residual,
        residual_std_error=float(np.sqrt(sigma2)),
        r_squared=float(r_squared),
        adj_r_squared=float(adj_r_squared),
        f_statistic=float(f_statistic),
        f_p_value=f_p_value,
        residuals=residuals,
    )

    logger.info(f"Fitted {model.formula()} on {n_obs} rows (R² = {model.r_squared:.4f})")

    return model


class Modeler:
    """
    Stage 4: Modeler

    Fits the configured linear model and appends its predictions to the
    table.

    Example:
        >>> modeler = Modeler(config={'target': 'mpg', 'predictors': ['wt', 'hp']})
        >>> model = modeler.fit(df)
        >>> augmented = modeler.add_predictions(df, model)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = {
            'target': 'mpg',
            'predictors': ['wt', 'hp'],
            'prediction_column': None  # None = predicted_<target>
        }

        if config:
            self.config.update(config)

        logger.info("Initialized Modeler")

    def fit(self, df: pd.DataFrame) -> LinearModel:
        return fit_linear_model(df, self.config['target'], self.config['predictors'])

    def add_predictions(self, df: pd.DataFrame, model: LinearModel) -> pd.DataFrame:
        """
        Return a copy of ``df`` with the model's predictions as the last
        column, replacing an existing prediction column in place.
        """
        column = self.config['prediction_column'] or f"predicted_{model.target}"

        augmented = df.copy()
        augmented[column] = model.predict(df).to_numpy()

        logger.info(f"Added prediction column '{column}'")

        return augmented
