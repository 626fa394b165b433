from setuptools import find_packages, setup

setup(
    name="cyclone-scm",
    version="0.1.0",
    license="Apache License 2.0",

    author="Caicloud Cyclone Team",
    python_requires=">=3.12",
    description="SCM provider layer of the Cyclone CI pipeline service, "
                "detecting and speaking GitLab API v3 and v4.",

    packages=find_packages(exclude=('tests', 'tests.*')),

    install_requires=[
        "Click>=8.0,<9.0",
        "httpx>=0.27,<1.0",
        "prometheus-client>=0.20,<1.0",
        "pydantic>=2.7,<3.0",
        "pydantic-settings>=2.3,<3.0",
        "python-gitlab>=4.0,<7.0",
        "requests>=2.31,<3.0",
        "structlog>=24.1",
    ],

    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-mock>=3.14",
        ],
    },

    test_suite="tests",

    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.12',
    ],
    entry_points={
        'console_scripts': [
            'cyclone-scm = cyclone_scm.cli:root',
        ],
    },
)
