"""NetCDF output: the two-phase container and the hypercube generator."""

from hypercube.writer.container import ContainerState, NetCDFDataWriter, NetCDFSchema
from hypercube.writer.generator import AxisNames, Generator, HypercubePlan, generate

__all__ = [
    'ContainerState',
    'NetCDFSchema',
    'NetCDFDataWriter',
    'AxisNames',
    'HypercubePlan',
    'Generator',
    'generate',
]
