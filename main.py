from rich.pretty import pprint

from argslot import *

parser = Parser()
parser.add_argument(Argument("file to read"))
parser.add_argument("--name", Argument("user name", required=False, default="anon"))
parser.add_argument("--tag", Argument("tags to attach", required=False, many=True))
parser.add_argument("-n", Argument("repetitions", required=False, default="1"))


if __name__ == '__main__':
    parser.parse()
    pprint(parser)
    pprint({
        "file": parser.get(0),
        "name": parser.get("name"),
        "tags": parser.get_many("tag"),
        "repetitions": parser.get("n", int),
    })
