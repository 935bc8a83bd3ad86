"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def contentws_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "1.0.0"

    setup(
        name="contentws",
        packages=find_packages(exclude=["tests", "tests.*", "examples"]),
        version=version,
        license="GPLv2",
        description="contentws : content web service on Flask-Restful and SqlAlchemy",
        long_description=open("README.rst").read(),
        keywords=["SqlAlchemy", "Flask", "REST", "CMS", "Web Service"],
        python_requires=">=3.8, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3.12",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.8",
        ],
        extras_require={"test": ["pytest>=7.0"]},
    )


contentws_setup()  # pragma: no cover
