from setuptools import setup, find_packages

setup(
    name='gatewayctl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'fastapi',
        'uvicorn',
        'python-dotenv',
        'pyyaml',
    ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
            'jsonschema',
        ],
    },
    entry_points={
        'console_scripts': [
            'gatewayctl=gatewayctl.cli:app'
        ]
    },
    description='HTTP and CLI control surface for the Envoy Gateway add-on, driven through kubectl',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
