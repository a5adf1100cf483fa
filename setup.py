from setuptools import setup, find_packages

setup(
    name="css-admission",
    version="1.0.0",
    packages=find_packages(),
    install_requires=[
        'orjson',
        'colorama>=0.4.6',
        'typing-extensions'
    ],
    extras_require={
        'test': ['pytest']
    },
    entry_points={
        'console_scripts': [
            'css-admission=css_admission.cli:main',
        ],
    },
    python_requires='>=3.8',
    description="An admission filter for untrusted, user-supplied CSS",
    long_description=open('README.md').read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
