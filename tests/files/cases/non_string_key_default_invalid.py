# @param {object} mapping
def main(mapping={1: "one"}):
    return mapping
