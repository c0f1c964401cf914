# Copyright 2021 Nokia

from setuptools import setup

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name='pyncedit',
    version='0.1.0',
    packages=['pyncedit'],
    license='Copyright 2021-2024 Nokia.',
    author='Nokia',
    author_email='',
    description='NETCONF write transactions: edit-config, commit and discard-changes for model-driven nodes',
    classifiers=[
        "License :: Other/Proprietary License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Topic :: Internet",
        "Topic :: System :: Networking",
        "Development Status :: 4 - Beta",
    ],
    install_requires=[
        "ncclient>=0.6.12",
        "lxml>=4.9.2",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires=">=3.10",
    long_description=long_description,
    long_description_content_type="text/markdown",
)
