from setuptools import find_packages, setup

setup(
    name="issueplan",
    version="0.1.0",
    description="Dependency-graph scheduling for issue backlogs",
    packages=find_packages(include=["issueplan", "issueplan.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
