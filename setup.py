from setuptools import find_packages, setup

__title__ = "bearer_challenge"
__description__ = "A parser and formatter for OAuth 2.0 Bearer challenges, as found in WWW-Authenticate headers."
__url__ = "https://github.com/guillp/bearer_challenge"
__version__ = "0.1.0"
__author__ = "Guillaume Pujol"
__author_email__ = "guill.p.linux@gmail.com"
__license__ = "Apache 2.0"
__copyright__ = "Copyright 2020 Guillaume Pujol"

with open("README.rst", "rt") as finput:
    readme = finput.read()

with open("requirements.txt", "rt") as finput:
    requires = [line.strip() for line in finput.readlines()]

with open("requirements_test.txt", "rt") as finput:
    test_requires = [line.strip() for line in finput.readlines()]

setup(
    name=__title__,
    version=__version__,
    description=__description__,
    long_description=readme,
    long_description_content_type="text/x-rst",
    author=__author__,
    author_email=__author_email__,
    url=__url__,
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"": ["LICENSE", "requirements.txt", "requirements_test.txt"]},
    package_dir={"bearer_challenge": "bearer_challenge"},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=requires,
    extras_require={"test": test_requires},
    license=__license__,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
    ],
    project_urls={"Source": "https://github.com/guillp/bearer_challenge",},
)
