from setuptools import setup, find_packages


setup(name='varform',
      version='0.1.0',
      description="Variational forms and distributed tensor assembly",
      author="The varform developers",
      python_requires=">=3.9",
      packages=find_packages(include=["varform", "varform.*"]),
      install_requires=[
          "numpy",
          "mpi4py",
          "decorator",
      ],
      extras_require={
          "test": ["pytest", "mpi-pytest"],
      })
