from setuptools import setup, find_packages

setup(
    name='surfacefire',
    version='0.1.0',
    packages=find_packages(exclude=['surfacefire.tests', 'surfacefire.tests.*']),
    package_data={
        'surfacefire.models': ['standard_fuel_models.json', 'moisture_scenarios.json'],
    },
    install_requires=[
        'numpy',
        'pandas',
        'pyarrow',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
            'ruff>=0.1.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'surfacefire=surfacefire.tools.surface_fire_cli:main',
        ],
    },
    python_requires='>=3.9',
)
