import os
import os.path
import setuptools # type: ignore

root_path = os.path.dirname(__file__)

with open(os.path.join(root_path, "README.md"), "r") as fh:
    long_description = fh.read()

version:dict = {}
with open(os.path.join(root_path, "src", "nusantarascript", "_version.py"), "r") as fh:
    exec(fh.read(), version)

setuptools.setup(
    name="nusantarascript",
    version=version["version"],
    description="NusantaraScript: an embeddable, Indonesian language event scripting engine for game servers.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(where="src"),
    package_dir={'': 'src'},

    package_data={
        'nusantarascript.data': ['*.toml', '*.ns'],
    },
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "numpy",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires='>=3.9',
    entry_points={
        'console_scripts': [
            'nusantarascript = nusantarascript.cli:main',
        ],
    },
)
