# @param {enum} color Pick a color
def main(color):
    return color
