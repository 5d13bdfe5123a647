"""The demo room: a small tree of scene nodes turned into VTK actors.

Scene nodes are plain dataclasses. addToRenderer() dispatches on the node
type, so adding a node kind means adding one dataclass and one branch.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import vtk

from roomview.digitalclock import DigitalClock

logger = logging.getLogger(__name__)

NEUTRAL_COLOR = (0.82, 0.82, 0.8)

Color = Tuple[float, float, float]


@dataclass
class MeshNode:
    name: str
    polyData: vtk.vtkPolyData
    color: Color
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)


@dataclass
class InstancedMeshNode:
    """One geometry drawn at many positions with per-instance scale."""

    name: str
    polyData: vtk.vtkPolyData
    color: Color
    positions: np.ndarray
    scales: Optional[np.ndarray] = None

    def __post_init__(self):
        self.positions = np.asarray(self.positions, dtype=float).reshape(-1, 3)
        if self.scales is None:
            self.scales = np.ones(len(self.positions))
        self.scales = np.asarray(self.scales, dtype=float)
        if len(self.scales) != len(self.positions):
            raise ValueError("%s: %d scales for %d instances" % (self.name, len(self.scales), len(self.positions)))


@dataclass
class GroupNode:
    name: str
    children: List[object] = field(default_factory=list)
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)


def boxPolyData(xLength, yLength, zLength):
    """Box resting on the y=0 plane, centered on the y axis."""
    cube = vtk.vtkCubeSource()
    cube.SetXLength(xLength)
    cube.SetYLength(yLength)
    cube.SetZLength(zLength)
    cube.SetCenter(0.0, yLength / 2.0, 0.0)
    cube.Update()
    return cube.GetOutput()


def spherePolyData(radius, resolution=16):
    sphere = vtk.vtkSphereSource()
    sphere.SetRadius(radius)
    sphere.SetThetaResolution(resolution)
    sphere.SetPhiResolution(resolution)
    sphere.Update()
    return sphere.GetOutput()


def _makeActor(mapper, color):
    actor = vtk.vtkActor()
    actor.SetMapper(mapper)
    actor.GetProperty().SetColor(*color)
    return actor


def addToRenderer(node, renderer, offset=(0.0, 0.0, 0.0)):
    """Add actors for *node* and its children. Returns {node name: actor}."""
    offset = np.asarray(offset, dtype=float)
    actors = {}

    if isinstance(node, GroupNode):
        groupOffset = offset + np.asarray(node.position, dtype=float)
        for child in node.children:
            actors.update(addToRenderer(child, renderer, groupOffset))
        return actors

    if isinstance(node, MeshNode):
        mapper = vtk.vtkPolyDataMapper()
        mapper.SetInputData(node.polyData)
        actor = _makeActor(mapper, node.color)
        actor.SetPosition(*(offset + np.asarray(node.position, dtype=float)))
    elif isinstance(node, InstancedMeshNode):
        points = vtk.vtkPoints()
        scales = vtk.vtkDoubleArray()
        scales.SetName("scale")
        for position, scale in zip(node.positions, node.scales):
            points.InsertNextPoint(*(offset + position))
            scales.InsertNextValue(scale)
        instances = vtk.vtkPolyData()
        instances.SetPoints(points)
        instances.GetPointData().AddArray(scales)

        mapper = vtk.vtkGlyph3DMapper()
        mapper.SetInputData(instances)
        mapper.SetSourceData(node.polyData)
        mapper.SetScaleArray("scale")
        mapper.SetScaleModeToScaleByMagnitude()
        mapper.ScalarVisibilityOff()
        actor = _makeActor(mapper, node.color)
    else:
        raise TypeError("Unsupported scene node type: %s" % type(node).__name__)

    renderer.AddActor(actor)
    actors[node.name] = actor
    return actors


def iterNodes(node):
    """Depth-first iteration over *node* and its descendants."""
    yield node
    if isinstance(node, GroupNode):
        for child in node.children:
            yield from iterNodes(child)


def buildRoomScene():
    """The room corner: floor, two walls, furniture and a potted plant."""
    wood = (0.55, 0.38, 0.26)
    wall = (0.78, 0.74, 0.86)

    room = GroupNode(
        "room",
        [
            MeshNode("floor", boxPolyData(4.0, 0.1, 4.0), (0.62, 0.5, 0.4), (0.0, -0.1, 0.0)),
            MeshNode("back wall", boxPolyData(4.0, 3.0, 0.1), wall, (0.0, 0.0, -2.05)),
            MeshNode("side wall", boxPolyData(0.1, 3.0, 4.0), wall, (2.05, 0.0, 0.0)),
        ],
    )

    desk = GroupNode(
        "desk",
        [
            MeshNode("desk top", boxPolyData(1.6, 0.05, 0.7), wood, (0.0, 0.72, 0.0)),
            MeshNode("desk leg left", boxPolyData(0.05, 0.72, 0.65), wood, (-0.75, 0.0, 0.0)),
            MeshNode("desk leg right", boxPolyData(0.05, 0.72, 0.65), wood, (0.75, 0.0, 0.0)),
            MeshNode("monitor", boxPolyData(0.9, 0.5, 0.04), (0.1, 0.1, 0.12), (0.0, 0.9, -0.2)),
            MeshNode("keyboard", boxPolyData(0.45, 0.02, 0.15), (0.8, 0.87, 0.75), (0.0, 0.77, 0.12)),
        ],
        position=(0.2, 0.0, -1.6),
    )

    bed = GroupNode(
        "bed",
        [
            MeshNode("bed frame", boxPolyData(1.0, 0.35, 2.0), wood),
            MeshNode("mattress", boxPolyData(0.95, 0.2, 1.95), (0.92, 0.92, 0.95), (0.0, 0.35, 0.0)),
            MeshNode("pillow", boxPolyData(0.6, 0.12, 0.35), (0.58, 0.45, 0.71), (0.0, 0.55, -0.75)),
        ],
        position=(1.45, 0.0, 0.6),
    )

    shelf = GroupNode(
        "shelf",
        [MeshNode("shelf board %d" % i, boxPolyData(1.2, 0.04, 0.3), wood, (0.0, 1.5 + 0.4 * i, 0.0)) for i in range(2)],
        position=(-0.9, 0.0, -1.85),
    )

    plant = GroupNode(
        "plant",
        [
            MeshNode("pot", boxPolyData(0.3, 0.35, 0.3), (0.7, 0.42, 0.3)),
            InstancedMeshNode(
                "leaves",
                spherePolyData(0.08),
                (0.36, 0.6, 0.33),
                positions=[(0.0, 0.45, 0.0), (0.1, 0.55, 0.05), (-0.08, 0.6, -0.04), (0.04, 0.7, -0.08), (-0.05, 0.75, 0.08)],
                scales=[1.2, 1.0, 1.1, 0.9, 0.8],
            ),
        ],
        position=(-1.6, 0.0, -1.6),
    )

    return GroupNode("scene", [room, desk, bed, shelf, plant])


class RoomScene(object):
    """The demo room with its digital clock and color/neutral styles."""

    def __init__(self, root=None, clock=None):
        self.root = root if root is not None else buildRoomScene()
        self.clock = clock if clock is not None else DigitalClock()
        self.clock.actor.SetPosition(-0.9, 2.1, -1.8)
        self.clock.actor.SetScale(0.004)
        self.actors = {}
        self.neutral = False

    def nodes(self):
        return list(iterNodes(self.root))

    def addToRenderer(self, renderer):
        self.actors = addToRenderer(self.root, renderer)
        renderer.AddActor(self.clock.actor)
        logger.debug("Added %d scene actors", len(self.actors))
        self.setNeutral(self.neutral)

    def setNeutral(self, neutral):
        """Draw everything in one neutral color, or in the scene colors."""
        self.neutral = bool(neutral)
        for node in iterNodes(self.root):
            actor = self.actors.get(node.name)
            if actor is not None:
                actor.GetProperty().SetColor(*(NEUTRAL_COLOR if self.neutral else node.color))

    def update(self):
        self.clock.update()
