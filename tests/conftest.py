import pytest


@pytest.fixture
def benford_compliant():
    return {
        'financial_data': [
            123.45, 187.92, 234.67, 298.34, 345.78, 456.23, 567.89, 678.12, 789.56,
            1234.56, 1876.43, 2345.67, 2987.34, 3456.78, 4567.89, 5678.12, 6789.34, 7890.45,
            12345.67, 18765.43, 23456.78, 29876.54, 34567.89, 45678.12, 56789.34, 67890.45, 78901.23,
            123456.78, 187654.32, 234567.89, 298765.43, 345678.91, 456789.12, 567890.23, 678901.34,
        ],
        'invoice_amounts': [
            101.50, 125.00, 198.75, 267.30, 334.20, 445.60, 523.80, 612.40, 785.90,
            1055.25, 1287.60, 1934.75, 2156.80, 3245.70, 4123.50, 5678.25, 6234.80, 7891.20,
            10234.50, 12876.30, 19847.60, 21568.90, 32457.80, 41235.60, 56782.40, 62348.70, 78912.30,
        ],
    }


@pytest.fixture
def benford_noncompliant():
    return {
        'uniform_data': [500.0 + i for i in range(30)],
        'suspicious_data': [lead * 1000.0 + i for lead in (7, 8, 9) for i in range(10)],
    }


@pytest.fixture
def pareto_compliant():
    return {
        'sales_data': [
            10000.0, 9500.0, 9000.0, 8500.0,
            1000.0, 950.0, 900.0, 850.0, 800.0, 750.0, 700.0, 650.0,
            600.0, 550.0, 500.0, 450.0, 400.0, 350.0, 300.0, 250.0,
        ],
        'customer_revenue': [
            50000.0, 45000.0, 40000.0, 35000.0, 30000.0,
            2000.0, 1900.0, 1800.0, 1700.0, 1600.0, 1500.0, 1400.0, 1300.0,
            1200.0, 1100.0, 1000.0, 900.0, 800.0, 700.0, 600.0, 500.0, 400.0, 300.0, 200.0, 100.0,
        ],
    }


@pytest.fixture
def pareto_uniform():
    return {'uniform_distribution': [1000.0 + 10 * i for i in range(20)]}


@pytest.fixture
def zipf_compliant():
    return {
        'word_frequencies': [
            10000.0, 5000.0, 3333.33, 2500.0, 2000.0, 1666.67, 1428.57, 1250.0, 1111.11, 1000.0,
            909.09, 833.33, 769.23, 714.29, 666.67, 625.0, 588.24, 555.56, 526.32, 500.0,
        ]
    }


@pytest.fixture
def normal_sample():
    return {
        'normal_sample': [
            98.5, 99.2, 100.1, 99.8, 100.4, 99.6, 100.8, 99.9, 100.2, 99.7,
            100.3, 99.4, 100.6, 99.1, 100.9, 99.3, 100.5, 99.0, 101.0, 99.8,
            100.0, 99.5, 100.7, 99.2, 100.3, 99.6, 100.1, 99.9, 100.4, 99.7,
        ]
    }


@pytest.fixture
def skewed_sample():
    return {
        'skewed_data': [
            1.0, 1.1, 1.2, 1.3, 1.5, 1.8, 2.2, 2.8, 3.6, 4.7,
            6.1, 8.0, 10.4, 13.5, 17.6, 22.9, 29.8, 38.7, 50.3, 65.4,
            85.0, 110.5, 143.7, 186.8, 242.8, 315.6, 410.3, 533.4, 693.4, 901.4,
        ]
    }


@pytest.fixture
def poisson_counts():
    return {
        'event_counts': [
            0, 1, 2, 1, 3, 0, 2, 1, 4, 2, 1, 0, 3, 2, 1, 5, 0, 2, 1, 3,
            2, 1, 0, 4, 2, 1, 3, 0, 2, 1, 2, 3, 1, 0, 2, 1, 4, 2, 0, 3,
        ]
    }


@pytest.fixture
def overdispersed_counts():
    return {
        'high_variance': [0] * 5 + [50] * 5 + [0] * 5 + [100] * 5 + [0] * 5 + [25] * 5
    }


@pytest.fixture
def integration_dataset():
    return {
        'comprehensive_dataset': {
            'financial_transactions': [
                123.45, 187.92, 234.67, 298.34, 345.78, 456.23, 567.89, 678.12, 789.56,
                1234.56, 1876.43, 2345.67, 2987.34, 3456.78, 4567.89, 5678.12, 6789.34, 7890.45,
            ],
            'sales_amounts': [
                50000.0, 45000.0, 40000.0, 35000.0, 30000.0,
                2000.0, 1900.0, 1800.0, 1700.0, 1600.0, 1500.0, 1400.0, 1300.0,
                1200.0, 1100.0, 1000.0, 900.0, 800.0, 700.0, 600.0,
            ],
            'quality_scores': [
                98.5, 99.2, 100.1, 99.8, 100.4, 99.6, 100.8, 99.9, 100.2, 99.7,
                100.3, 99.4, 100.6, 99.1, 100.9, 99.3, 100.5, 99.0, 101.0, 99.8,
            ],
            'incident_counts': [0, 1, 2, 1, 3, 0, 2, 1, 4, 2, 1, 0, 3, 2, 1, 5, 0, 2, 1, 3],
        }
    }


@pytest.fixture
def valid_dataset():
    return [
        123.45, 234.67, 345.89, 456.12, 567.34, 678.56, 789.78, 890.23, 901.45, 123.67,
        234.89, 345.12, 456.34, 567.56, 678.78, 789.01, 890.23, 901.45, 123.67, 234.89,
    ]


@pytest.fixture
def small_dataset():
    return [1.0, 2.0, 3.0]


@pytest.fixture
def normal_with_outliers():
    return [
        98.5, 99.2, 100.1, 99.8, 100.4, 99.6, 100.8, 99.9, 100.2, 99.7,
        100.3, 99.4, 100.6, 99.1, 100.9, 99.3, 100.5, 99.0, 101.0, 99.8,
        150.0,
        100.0, 99.5, 100.7, 99.2, 100.3, 99.6, 100.1, 99.9, 100.4, 99.7,
        50.0,
    ]


@pytest.fixture
def generation_configs():
    return {
        'benford': {'type': 'benford', 'count': 1000, 'base': 10},
        'normal': {'type': 'normal', 'count': 500, 'mean': 100.0, 'std_dev': 15.0},
        'poisson': {'type': 'poisson', 'count': 300, 'lambda': 5.0},
    }
