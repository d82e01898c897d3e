"""Single-law analyzers. Each takes an extracted sample and resolved options."""

from .benford import analyze_benford
from .pareto import analyze_pareto
from .zipf import analyze_zipf
from .normal import analyze_normal
from .poisson import analyze_poisson

ANALYZERS = {
    'benford': analyze_benford,
    'pareto': analyze_pareto,
    'zipf': analyze_zipf,
    'normal': analyze_normal,
    'poisson': analyze_poisson,
}

DESCRIPTIONS = {
    'benford': "Leading-digit frequencies against Benford's law (fraud and anomaly screening)",
    'pareto': 'Concentration of the total in the top 20% of items (80/20 rule)',
    'zipf': 'Power-law decay of values by rank',
    'normal': 'Normality of the sample (shape, Shapiro-Wilk / D\'Agostino-Pearson)',
    'poisson': 'Equidispersion and goodness of fit of event counts',
}

__all__ = [
    'ANALYZERS',
    'DESCRIPTIONS',
    'analyze_benford',
    'analyze_pareto',
    'analyze_zipf',
    'analyze_normal',
    'analyze_poisson',
]
