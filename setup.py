# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="shadersync",
    version="1.0.0",
    description="Delete stale SPIR-V artifacts and recompile a shader tree with an external compiler",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["shadersync", "shadersync.*"]),
    python_requires=">=3.9",
    install_requires=[
        "colorama>=0.4.6",  # Colorized error output on the console
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'shadersync=shadersync.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
