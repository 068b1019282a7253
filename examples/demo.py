from numbers import Number

from adt import Record, Type, declare

Bool = Type('Bool', [('True', 0), ('False', 0)])
Shape = Type('Shape', [('Circle', 1), ('Rect', 2), ('Dot', 0)])

area = Shape.match({
    'Circle': lambda r: 3.14159 * r * r,
    'Rect': lambda wh: wh[0] * wh[1],
    'Dot': 0,
})

Point = Record('Point', {'x': Number, 'y': Number, 'visible': Bool})


def main():
    print(Shape)
    for shape in [Shape.Circle(1.0), Shape.Rect(2, 3), Shape.Dot()]:
        print(shape, area(shape))

    p = Point.of({'x': 1, 'y': 2, 'visible': Bool['True']()})
    print(p)
    print(Point.lenses.x.over(lambda x: x + 1, p))

    with open('examples/shapes.adt') as f:
        declared = declare(f.read(), file_path='examples/shapes.adt')
    for t in declared.values():
        print(t)


if __name__ == '__main__':
    main()
