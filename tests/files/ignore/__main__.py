# Root function
# @returns {string}
def main():
    return "root"
