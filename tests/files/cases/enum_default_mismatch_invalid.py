# @param {enum} unit
#   ["seconds", 1]
#   ["minutes", 60]
def main(unit=60):
    return unit
