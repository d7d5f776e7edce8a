#!/usr/bin/env python3

import sys
import logging

from difffunc.exprs import Id, Sin, Cos, Log


def example_functions():
    r"""Return `(name, expression)` pairs of the functions to show."""
    return [
        ("f", Sin.div(Id)),
        ("g", Log.div(Id)),
        ("h", Log.of(Log.of(Cos))),
    ]


class Main(object):
    def __init__(self, *args):
        self.args = list(args)

    def pop_flag(self, flag):
        try:
            self.args.remove(flag)
            return True
        except ValueError:
            pass
        return False

    def pop_option(self, option):
        try:
            idx = self.args.index(option)
        except ValueError:
            return None
        try:
            value = self.args[idx+1]
        except IndexError:
            logging.error("Option %s requires a value.", option)
            sys.exit(2)
        del self.args[idx:idx+2]
        return value

    def main(self):
        if self.pop_flag('-vv'):
            logging.getLogger().setLevel(logging.DEBUG)
        elif any([self.pop_flag('-v'), self.pop_flag('--verbose')]):
            logging.getLogger().setLevel(logging.INFO)
        expand = self.pop_flag('--expand')
        at = self.pop_option('--at')
        if at is not None:
            try:
                at = float(at)
            except ValueError:
                logging.error("Not a number: %s", at)
                sys.exit(2)
        if self.args:
            logging.error("Unknown arguments: %s", " ".join(self.args))
            sys.exit(2)
        for name, f in example_functions():
            df = f.differentiate()
            logging.info("Differentiated %s.", name)
            print("{name}(x) = {f}, {name}'(x) = {df}".format(name=name, f=f, df=df))
            if expand:
                print("  expanded: {name}'(x) = {e}".format(name=name, e=df.expand()))
            if at is not None:
                print("  {name}({x!r}) = {v!r}, {name}'({x!r}) = {dv!r}".format(
                    name=name, x=at, v=f.evaluate(at), dv=df.evaluate(at)
                ))


if __name__ == "__main__":
    logging.basicConfig(format="%(levelname)s: %(message)s")
    Main(*sys.argv[1:]).main()
