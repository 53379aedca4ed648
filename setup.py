#!/usr/bin/env python

from setuptools import setup

setup(name="pyrstat",
	version="1.0",
	description="Pyrstat: rstat daemon client using ONC RPC over UDP",
	license="GPLv2",
	packages=[
		"pyrstat",
		"pyrstat.layer567"
	],
	classifiers=[
		"Development Status :: 4 - Beta",
		"Intended Audience :: Developers",
		"Intended Audience :: System Administrators",
		"License :: OSI Approved :: GNU General Public License v2 (GPLv2)",
		"Natural Language :: English",
		"Programming Language :: Python :: 3",
		"Programming Language :: Python :: Implementation :: CPython",
		"Programming Language :: Python :: Implementation :: PyPy",
		"Topic :: System :: Monitoring"
	],
	python_requires=">=3.6"
)
