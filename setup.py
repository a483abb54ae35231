from setuptools import setup, find_packages

setup(
    name='git-bump',
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"git_bump": ["sample_config.lua"]},
    version='0.3.0',
    description='Consistently bump version numbers with Lua scripts',
    keywords=['git', 'version', 'bump', 'release', 'lua', 'automation'],
    classifiers=['Development Status :: 4 - Beta',
                 'Environment :: Console',
                 'Intended Audience :: Developers',
                 'Topic :: Software Development :: Version Control :: Git',
                 'Topic :: Software Development :: Build Tools',
                 'Programming Language :: Python :: 3'],
    python_requires='>=3.10',
    install_requires=['docopt', 'rich', 'blinker', 'lupa>=2.0'],
    extras_require={'test': ['pytest']},
    entry_points={
        "console_scripts": ['git-bump = git_bump.git_bump:run_git_bump']
    }
)
